from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator


LegacyFlag = str | bool | None


class LegacyIGroupRecord(BaseModel):
    """One row of the MKP Connect i-group export, as written to ``igroups/*.json``."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    mkp_connect_id: int | None = None
    igroup_name: str | None = None
    about: str | None = None
    igroup_type: str | None = None
    igroup_status: str | None = None
    igroup_class: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    state_province: str | None = None
    country: str | None = None
    community_name: str | None = None
    area_name: str | None = None
    owner_name: str | None = None
    community_id: int | None = None
    area_id: int | None = None
    owner_id: int | None = None
    meeting_night: str | None = None
    meeting_time: str | None = None
    meeting_frequency: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    is_accepting_initiated_visitors: LegacyFlag = None
    is_accepting_uninitiated_visitors: LegacyFlag = None
    is_accepting_new_members: LegacyFlag = None
    igroup_is_private: LegacyFlag = None
    is_public_display: LegacyFlag = None
    igroup_email: str | None = None
    igroup_is_mixed_gender: LegacyFlag = None
    igroup_mkpi: str | None = None
    mkp_connect_contact_uid: int | None = None
    mkp_connect_contact_name: str | None = None
    mkp_connect_contact_email: str | None = None

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator(
        "mkp_connect_id",
        "community_id",
        "area_id",
        "owner_id",
        "mkp_connect_contact_uid",
        mode="before",
    )
    @classmethod
    def _blank_id_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_raw(cls, data: Any) -> "LegacyIGroupRecord":
        record = cls.model_validate(data)
        record._raw = dict(data)
        return record

    @property
    def raw(self) -> dict[str, Any]:
        """The record exactly as exported, for the ``mkpconnect_data`` audit column."""
        if self._raw:
            return dict(self._raw)
        return self.model_dump(mode="json")


class LegacyMember(BaseModel):
    """One member entry of an ``igroups/membership/*.json`` export."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    drupal_user_id: int | None = None
    member_email: str | None = None
    user_name: str | None = None
    civicrm_user_id: int | None = None
    sort_name: str | None = None
    display_name: str | None = None
    nick_name: str | None = None
    legal_name: str | None = None
    image_URL: str | None = None
    IEN: str | None = None
    birth_date: str | None = None
    deceased_date: str | None = None

    @field_validator("drupal_user_id", "civicrm_user_id", mode="before")
    @classmethod
    def _blank_id_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "member_email", "display_name", "sort_name", "IEN", "birth_date", "deceased_date"
    )
    @classmethod
    def _blank_text_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class LegacyMembership(BaseModel):
    """Membership roster of one legacy i-group."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    group_id: int
    group_email: str | None = None
    group_type: str | None = None
    members: list[Any] = []
