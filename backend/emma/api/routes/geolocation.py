import json
from urllib.parse import quote, unquote

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from emma.schemas.envelope import Envelope

router = APIRouter()

LOCATION_COOKIE = "emma_location"
LOCATION_MAX_AGE = 24 * 60 * 60


class LocationData(BaseModel):
    latitude: str | None = None
    longitude: str | None = None
    city: str | None = None
    state: str | None = None
    accuracy: str = "ip"


def location_from_headers(request: Request) -> LocationData:
    """City-level location from the edge network's ``x-vercel-ip-*`` headers."""
    headers = request.headers
    city = headers.get("x-vercel-ip-city")
    return LocationData(
        latitude=headers.get("x-vercel-ip-latitude") or None,
        longitude=headers.get("x-vercel-ip-longitude") or None,
        city=unquote(city) if city else None,
        state=headers.get("x-vercel-ip-country-region") or None,
    )


@router.get("/", response_model=Envelope[LocationData])
def get_geolocation(request: Request, response: Response) -> dict:
    location = location_from_headers(request)
    response.set_cookie(
        LOCATION_COOKIE,
        quote(json.dumps(location.model_dump())),
        max_age=LOCATION_MAX_AGE,
        path="/",
        samesite="lax",
    )
    return {"success": True, "data": location}
