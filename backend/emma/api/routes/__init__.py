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

__all__ = [
    "addresses",
    "areas",
    "communities",
    "event_types",
    "events",
    "f_groups",
    "geolocation",
    "groups",
    "i_groups",
    "nwta_events",
    "people",
    "venues",
    "warriors",
]
