"""Shapes of the per-record JSON files consumed by the import scripts.

Each model lists, in ``*_FIELDS`` tuples, which of its attributes land in
which table so the importers can split one file into base and extension rows.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from emma.models.enums import FGroupType
from emma.schemas.common import ScheduleEvent


class ImportModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def values_for(self, fields: tuple[str, ...]) -> dict[str, Any]:
        return {name: getattr(self, name) for name in fields}


class ImportedAddress(ImportModel):
    id: uuid.UUID
    address_1: str = Field(min_length=1)
    address_2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str = "United States"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


ADDRESS_FIELDS = (
    "address_1",
    "address_2",
    "city",
    "state",
    "postal_code",
    "country",
    "deleted_at",
)


class ImportedPerson(ImportModel):
    id: uuid.UUID
    first_name: str = Field(min_length=1)
    middle_name: str | None = None
    last_name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    billing_address_id: uuid.UUID | None = None
    mailing_address_id: uuid.UUID | None = None
    physical_address_id: uuid.UUID | None = None
    notes: str | None = None
    photo_url: str | None = None
    birth_date: date | None = None
    deceased_date: date | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    mkpconnect_data: dict[str, Any] | None = None


PERSON_FIELDS = (
    "first_name",
    "middle_name",
    "last_name",
    "email",
    "phone",
    "billing_address_id",
    "mailing_address_id",
    "physical_address_id",
    "notes",
    "photo_url",
    "birth_date",
    "deceased_date",
    "is_active",
    "deleted_at",
    "mkpconnect_data",
)


class ImportedWarrior(ImportedPerson):
    log_id: uuid.UUID | None = None
    initiation_id: uuid.UUID | None = None
    initiation_on: date | None = None
    status: str | None = None
    inner_essence_name: str | None = None
    training_events: list[str] = Field(default_factory=list)
    staffed_events: list[str] = Field(default_factory=list)
    lead_events: list[str] = Field(default_factory=list)
    mos_events: list[str] = Field(default_factory=list)
    area_id: uuid.UUID | None = None
    community_id: uuid.UUID | None = None


WARRIOR_FIELDS = (
    "log_id",
    "initiation_id",
    "initiation_on",
    "status",
    "inner_essence_name",
    "training_events",
    "staffed_events",
    "lead_events",
    "mos_events",
    "area_id",
    "community_id",
    "is_active",
)


class ImportedVenue(ImportModel):
    id: uuid.UUID
    name: str = Field(min_length=1)
    description: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    timezone: str | None = "America/New_York"
    mailing_address_id: uuid.UUID | None = None
    physical_address_id: uuid.UUID | None = None
    primary_contact_id: uuid.UUID | None = None
    area_id: uuid.UUID | None = None
    community_id: uuid.UUID | None = None
    event_types: list[Any] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    nudity_note: str | None = None
    rejected_note: str | None = None
    is_nudity: bool = False
    is_rejected: bool = False
    is_private_residence: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


VENUE_FIELDS = (
    "name",
    "description",
    "email",
    "phone",
    "website",
    "timezone",
    "mailing_address_id",
    "physical_address_id",
    "primary_contact_id",
    "area_id",
    "community_id",
    "event_types",
    "latitude",
    "longitude",
    "nudity_note",
    "rejected_note",
    "is_nudity",
    "is_rejected",
    "is_private_residence",
    "is_active",
    "deleted_at",
)


class ImportedAreaAdmin(ImportModel):
    id: uuid.UUID | None = None
    person_id: uuid.UUID


class ImportedArea(ImportModel):
    id: uuid.UUID
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=6)
    description: str | None = None
    color: str | None = None
    is_active: bool = True
    image_url: str | None = None
    steward_id: uuid.UUID | None = None
    finance_coordinator_id: uuid.UUID | None = None
    geo_polygon: Any | None = Field(
        default=None, validation_alias=AliasChoices("geo_polygon", "geo_json")
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    area_admins: list[ImportedAreaAdmin] = Field(default_factory=list)


AREA_FIELDS = (
    "name",
    "code",
    "description",
    "color",
    "is_active",
    "image_url",
    "steward_id",
    "finance_coordinator_id",
    "geo_polygon",
    "deleted_at",
)


class ImportedCommunity(ImportModel):
    id: uuid.UUID
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    description: str | None = None
    image_url: str | None = None
    color: str | None = None
    is_active: bool = True
    area_id: uuid.UUID | None = None
    coordinator_id: uuid.UUID | None = None
    geo_json: Any | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


COMMUNITY_FIELDS = (
    "name",
    "code",
    "description",
    "image_url",
    "color",
    "is_active",
    "area_id",
    "coordinator_id",
    "geo_json",
    "deleted_at",
)


class ImportedGroup(ImportModel):
    id: uuid.UUID
    name: str = Field(min_length=1)
    description: str = ""
    url: str | None = None
    members: list[str] = Field(default_factory=list)
    is_accepting_new_members: bool = False
    membership_criteria: str | None = None
    venue_id: uuid.UUID | None = None
    genders: str | None = None
    is_publicly_listed: bool = False
    public_contact_id: uuid.UUID | None = None
    primary_contact_id: uuid.UUID | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    latitude: float | None = None
    longitude: float | None = None
    mkpconnect_data: dict[str, Any] | None = None

    is_accepting_initiated_visitors: bool = False
    is_accepting_uninitiated_visitors: bool = False
    is_requiring_contact_before_visiting: bool = False
    schedule_events: list[ScheduleEvent] = Field(default_factory=list)
    schedule_description: str | None = None
    area_id: uuid.UUID | None = None
    community_id: uuid.UUID | None = None
    contact_email: str | None = None
    status: str | None = None
    affiliation: str | None = Field(
        default=None, validation_alias=AliasChoices("affiliation", "class")
    )

    def extension_values(self) -> dict[str, Any]:
        values = self.values_for(GROUP_EXTENSION_FIELDS)
        values["schedule_events"] = [event.model_dump() for event in self.schedule_events]
        return values


GROUP_FIELDS = (
    "name",
    "description",
    "url",
    "members",
    "is_accepting_new_members",
    "membership_criteria",
    "venue_id",
    "genders",
    "is_publicly_listed",
    "public_contact_id",
    "primary_contact_id",
    "is_active",
    "deleted_at",
    "latitude",
    "longitude",
    "mkpconnect_data",
)

GROUP_EXTENSION_FIELDS = (
    "is_accepting_initiated_visitors",
    "is_accepting_uninitiated_visitors",
    "is_requiring_contact_before_visiting",
    "schedule_events",
    "schedule_description",
    "area_id",
    "community_id",
    "contact_email",
    "status",
    "affiliation",
    "is_active",
    "deleted_at",
)


class ImportedIGroup(ImportedGroup):
    pass


class ImportedFGroup(ImportedGroup):
    group_type: FGroupType
    is_accepting_new_facilitators: bool = True
    facilitators: list[str] = Field(default_factory=list)

    def extension_values(self) -> dict[str, Any]:
        values = super().extension_values()
        values["group_type"] = self.group_type.value
        values["is_accepting_new_facilitators"] = self.is_accepting_new_facilitators
        values["facilitators"] = list(self.facilitators)
        return values
