from emma.models.enums import *  # noqa: F403
from emma.models.events import Event, EventType, NwtaEvent
from emma.models.geography import Area, AreaAdmin, Community
from emma.models.groups import FGroup, Group, IGroup
from emma.models.people import Address, Person, Warrior
from emma.models.venues import Venue

__all__ = [
    "Address",
    "Area",
    "AreaAdmin",
    "Community",
    "Event",
    "EventType",
    "FGroup",
    "Group",
    "IGroup",
    "NwtaEvent",
    "Person",
    "Venue",
    "Warrior",
]
