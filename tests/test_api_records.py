import uuid

from factories import add_address, add_person


ADDRESS = {
    "address_1": "1 Main St",
    "city": "Boulder",
    "state": "CO",
    "postal_code": "80302",
}


def test_address_lifecycle(client):
    created = client.post("/api/addresses/", json=ADDRESS)
    assert created.status_code == 201
    body = created.json()
    assert body["message"] == "Address created successfully"
    address = body["data"]
    assert address["country"] == "United States"
    assert address["address_2"] is None

    client.post("/api/addresses/", json={**ADDRESS, "city": "Denver", "postal_code": "80202"})
    listing = client.get("/api/addresses/", params={"search": "802"}).json()
    assert listing["count"] == 2
    denver = client.get("/api/addresses/", params={"search": "denv"}).json()
    assert [row["city"] for row in denver["data"]] == ["Denver"]

    updated = client.put(f"/api/addresses/{address['id']}", json={"address_2": "Suite 4"})
    assert updated.json()["data"]["address_2"] == "Suite 4"
    assert updated.json()["data"]["city"] == "Boulder"

    assert client.get("/api/addresses/stats").json()["data"] == {"total": 2}

    deleted = client.delete(f"/api/addresses/{address['id']}").json()
    assert deleted["message"] == "Address deleted successfully"
    assert deleted["data"]["id"] == address["id"]
    assert client.get(f"/api/addresses/{address['id']}").status_code == 404
    assert client.get("/api/addresses/stats").json()["data"]["total"] == 1


def test_address_requires_lines(client):
    response = client.post("/api/addresses/", json={**ADDRESS, "city": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_address_cannot_be_blanked(client, session):
    address = add_address(session)

    response = client.put(f"/api/addresses/{address.id}", json={"city": None})

    assert response.status_code == 400
    assert response.json()["error"] == "Failed to update address"


def test_deleting_address_clears_person_reference(client, session):
    address = add_address(session)
    person = add_person(session, mailing_address_id=address.id)

    assert client.delete(f"/api/addresses/{address.id}").status_code == 200

    assert client.get(f"/api/people/{person.id}").json()["data"]["mailing_address_id"] is None


def test_event_lifecycle(client, session):
    leader = add_person(session)
    created = client.post(
        "/api/events/",
        json={
            "name": "Open Day",
            "description": "Meet the community",
            "primary_leader_id": str(leader.id),
            "start_at": "2026-05-01T18:00:00Z",
            "staff_schedule": [{"start": "2026-05-01T17:00:00", "end": "2026-05-01T21:00:00"}],
        },
    )
    assert created.status_code == 201
    event = created.json()["data"]
    assert created.json()["message"] == "Event created successfully"
    assert event["primary_leader_id"] == str(leader.id)
    assert event["staff_schedule"][0]["end"] == "2026-05-01T21:00:00"
    assert "rookies" not in event

    assert client.get("/api/events/", params={"search": "community"}).json()["count"] == 1
    assert client.get("/api/events/", params={"published": "true"}).json()["count"] == 0

    updated = client.put(f"/api/events/{event['id']}", json={"is_published": True})
    assert updated.json()["message"] == "Event updated successfully"
    assert client.get("/api/events/", params={"published": "true"}).json()["count"] == 1

    deleted = client.delete(f"/api/events/{event['id']}").json()
    assert deleted["message"] == "Event deleted successfully"
    assert deleted["data"]["is_active"] is False
    assert client.get(f"/api/events/{event['id']}").json()["data"]["is_active"] is False
    assert client.get("/api/events/", params={"active": "true"}).json()["count"] == 0


def test_event_rejects_unknown_references(client):
    response = client.post("/api/events/", json={"name": "Ghost", "venue_id": str(uuid.uuid4())})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Venue" in response.json()["error"]


def test_event_invalid_published_filter(client):
    response = client.get("/api/events/", params={"published": "yes"})

    assert response.status_code == 400


def test_events_hide_nwta_unless_included(client):
    nwta = client.post("/api/event-types/", json={"name": "New Warrior Training", "code": "NWTA"})
    social = client.post("/api/event-types/", json={"name": "Social", "code": "SOC"})
    client.post("/api/events/", json={"name": "Weekend", "event_type_id": nwta.json()["data"]["id"]})
    client.post("/api/events/", json={"name": "Picnic", "event_type_id": social.json()["data"]["id"]})
    inactive = client.post("/api/events/", json={"name": "Untyped", "is_active": False})
    assert inactive.status_code == 201

    default = client.get("/api/events/").json()
    assert sorted(event["name"] for event in default["data"]) == ["Picnic", "Untyped"]
    assert client.get("/api/events/", params={"nwta": "include"}).json()["count"] == 3

    stats = client.get("/api/events/stats").json()["data"]
    assert stats == {"total": 2, "active": 1, "inactive": 1}
    included = client.get("/api/events/stats", params={"nwta": "include"}).json()["data"]
    assert included == {"total": 3, "active": 2, "inactive": 1}


def test_warrior_stats(client):
    for first_name, status in (("Ari", "active"), ("Ben", "active"), ("Cal", "deceased")):
        client.post(
            "/api/warriors/",
            json={"first_name": first_name, "last_name": "Stone", "status": status},
        )
    client.post(
        "/api/warriors/",
        json={"first_name": "Dov", "last_name": "Stone", "status": "active", "is_active": False},
    )
    client.post("/api/warriors/", json={"first_name": "Eli", "last_name": "Stone"})

    stats = client.get("/api/warriors/stats").json()

    assert stats["data"] == {
        "total": 5,
        "active": 4,
        "inactive": 1,
        "by_status": {"active": 2, "deceased": 1},
    }


def test_fgroup_stats(client):
    client.post("/api/f-groups/", json={"name": "Men's Circle"})
    client.post("/api/f-groups/", json={"name": "Open Circle", "group_type": "Mixed Gender"})
    client.post("/api/f-groups/", json={"name": "Old Circle", "is_active": False})

    stats = client.get("/api/f-groups/stats").json()["data"]

    assert stats == {
        "total": 3,
        "active": 2,
        "inactive": 1,
        "by_group_type": {"Men's": 1, "Mixed Gender": 1},
    }
