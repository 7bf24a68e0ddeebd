from enum import Enum


class GroupKind(str, Enum):
    IGROUP = "IGroup"
    FGROUP = "FGroup"


class FGroupType(str, Enum):
    MENS = "Men's"
    MIXED_GENDER = "Mixed Gender"
    OPEN_MENS = "Open Men's"
    CLOSED_MENS = "Closed Men's"


class GroupGenders(str, Enum):
    MENS = "Men's"
    MIXED_GENDER = "Mixed Gender"


class DistanceUnits(str, Enum):
    METERS = "meters"


class WarriorStatus(str, Enum):
    ACTIVE = "active"
    DECEASED = "deceased"
