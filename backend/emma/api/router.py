from fastapi import APIRouter

from emma.api.routes import (
    addresses,
    areas,
    communities,
    event_types,
    events,
    f_groups,
    geolocation,
    groups,
    i_groups,
    nwta_events,
    people,
    venues,
    warriors,
)

api_router = APIRouter()

api_router.include_router(addresses.router, prefix="/addresses", tags=["addresses"])
api_router.include_router(areas.router, prefix="/areas", tags=["areas"])
api_router.include_router(communities.router, prefix="/communities", tags=["communities"])
api_router.include_router(people.router, prefix="/people", tags=["people"])
api_router.include_router(venues.router, prefix="/venues", tags=["venues"])
api_router.include_router(warriors.router, prefix="/warriors", tags=["warriors"])
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(i_groups.router, prefix="/i-groups", tags=["i-groups"])
api_router.include_router(f_groups.router, prefix="/f-groups", tags=["f-groups"])
api_router.include_router(nwta_events.router, prefix="/nwta-events", tags=["nwta-events"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(event_types.router, prefix="/event-types", tags=["event-types"])
api_router.include_router(geolocation.router, prefix="/geolocation", tags=["geolocation"])
