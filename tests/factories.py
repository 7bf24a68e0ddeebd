"""Row builders shared by the database-backed tests."""

import uuid

from emma.models import Address, Area, Community, Person


def add_address(session, **overrides) -> Address:
    values = {
        "id": uuid.uuid4(),
        "address_1": "1 Main St",
        "city": "Boulder",
        "state": "CO",
        "postal_code": "80302",
    }
    values.update(overrides)
    address = Address(**values)
    session.add(address)
    session.commit()
    return address


def add_person(session, **overrides) -> Person:
    values = {"id": uuid.uuid4(), "first_name": "Sam", "last_name": "Rivera"}
    values.update(overrides)
    person = Person(**values)
    session.add(person)
    session.commit()
    return person


def add_area(session, **overrides) -> Area:
    values = {"id": uuid.uuid4(), "name": "Colorado", "code": "CO"}
    values.update(overrides)
    area = Area(**values)
    session.add(area)
    session.commit()
    return area


def add_community(session, **overrides) -> Community:
    values = {"id": uuid.uuid4(), "name": "Boulder", "code": "BLD"}
    values.update(overrides)
    community = Community(**values)
    session.add(community)
    session.commit()
    return community


def legacy_group(**overrides) -> dict:
    record = {
        "mkp_connect_id": 101,
        "igroup_name": "Boulder Tuesday I-Group",
        "about": None,
        "igroup_status": "open",
        "area_name": "Colorado",
        "community_name": None,
        "is_accepting_initiated_visitors": "yes",
        "is_accepting_uninitiated_visitors": "no",
        "is_accepting_new_members": "yes",
        "is_public_display": "yes",
        "igroup_is_mixed_gender": "no",
        "meeting_frequency": "Weekly",
        "meeting_night": "Tuesday",
        "meeting_time": "7:00 PM",
        "latitude": "40.015",
        "longitude": "-105.270",
        "igroup_email": "boulder@example.org",
    }
    record.update(overrides)
    return record


def legacy_member(**overrides) -> dict:
    record = {
        "drupal_user_id": 5001,
        "member_email": None,
        "user_name": "member",
        "civicrm_user_id": None,
        "do_not_email": 0,
        "is_opt_out": 0,
        "sort_name": None,
        "display_name": None,
        "image_URL": None,
        "IEN": None,
        "birth_date": None,
        "deceased_date": None,
    }
    record.update(overrides)
    return record
