import uuid

from sqlalchemy import Boolean, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emma.db.base import Base, JSONType
from emma.models.geography import Area, Community
from emma.models.mixins import ActiveMixin, TimestampMixin
from emma.models.people import Person
from emma.models.venues import Venue


class Group(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text, default="")
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    members: Mapped[list[str]] = mapped_column(JSONType, default=list)
    is_accepting_new_members: Mapped[bool] = mapped_column(Boolean, default=False)
    membership_criteria: Mapped[str | None] = mapped_column(Text, nullable=True)
    venue_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("venues.id", ondelete="SET NULL"), nullable=True, index=True
    )
    genders: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_publicly_listed: Mapped[bool] = mapped_column(Boolean, default=False)
    public_contact_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"), nullable=True
    )
    primary_contact_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"), nullable=True
    )
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    mkpconnect_data: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    venue: Mapped[Venue | None] = relationship(lazy="joined")
    public_contact: Mapped[Person | None] = relationship(foreign_keys=[public_contact_id])
    primary_contact: Mapped[Person | None] = relationship(foreign_keys=[primary_contact_id])


class GroupExtensionMixin:
    """Columns shared by the i_groups and f_groups extension tables."""

    is_accepting_initiated_visitors: Mapped[bool] = mapped_column(Boolean, default=False)
    is_accepting_uninitiated_visitors: Mapped[bool] = mapped_column(Boolean, default=False)
    is_requiring_contact_before_visiting: Mapped[bool] = mapped_column(
        Boolean, default=False
    )
    schedule_events: Mapped[list[dict]] = mapped_column(JSONType, default=list)
    schedule_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    affiliation: Mapped[str | None] = mapped_column(String(50), nullable=True)


class IGroup(GroupExtensionMixin, ActiveMixin, TimestampMixin, Base):
    __tablename__ = "i_groups"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True
    )
    log_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    area_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("areas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("communities.id", ondelete="SET NULL"), nullable=True, index=True
    )

    group: Mapped[Group] = relationship(lazy="joined")
    area: Mapped[Area | None] = relationship(lazy="joined")
    community: Mapped[Community | None] = relationship(lazy="joined")


class FGroup(GroupExtensionMixin, ActiveMixin, TimestampMixin, Base):
    __tablename__ = "f_groups"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True
    )
    group_type: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    is_accepting_new_facilitators: Mapped[bool] = mapped_column(Boolean, default=True)
    facilitators: Mapped[list[str]] = mapped_column(JSONType, default=list)
    area_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("areas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("communities.id", ondelete="SET NULL"), nullable=True, index=True
    )

    group: Mapped[Group] = relationship(lazy="joined")
    area: Mapped[Area | None] = relationship(lazy="joined")
    community: Mapped[Community | None] = relationship(lazy="joined")
