import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emma.db.base import Base, JSONType
from emma.models.geography import Area, Community
from emma.models.mixins import ActiveMixin, TimestampMixin
from emma.models.venues import Venue


class EventType(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "event_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255))
    code: Mapped[str | None] = mapped_column(String(6), unique=True, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), default="#6B7280")
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)


class Event(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_type_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("event_types.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    area_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("areas.id"), nullable=True)
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("communities.id"), nullable=True
    )
    venue_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("venues.id"), nullable=True)
    staff_cost: Mapped[int] = mapped_column(Integer, default=0)
    staff_capacity: Mapped[int] = mapped_column(Integer, default=0)
    potential_staff: Mapped[list[str]] = mapped_column(JSONType, default=list)
    committed_staff: Mapped[list[str]] = mapped_column(JSONType, default=list)
    alternate_staff: Mapped[list[str]] = mapped_column(JSONType, default=list)
    participant_cost: Mapped[int] = mapped_column(Integer, default=0)
    participant_capacity: Mapped[int] = mapped_column(Integer, default=0)
    potential_participants: Mapped[list[str]] = mapped_column(JSONType, default=list)
    committed_participants: Mapped[list[str]] = mapped_column(JSONType, default=list)
    waitlist_participants: Mapped[list[str]] = mapped_column(JSONType, default=list)
    primary_leader_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id"), nullable=True
    )
    leaders: Mapped[list[str]] = mapped_column(JSONType, default=list)
    participant_schedule: Mapped[list[dict]] = mapped_column(JSONType, default=list)
    staff_schedule: Mapped[list[dict]] = mapped_column(JSONType, default=list)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    start_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    area: Mapped[Area | None] = relationship(lazy="joined")
    community: Mapped[Community | None] = relationship(lazy="joined")
    venue: Mapped[Venue | None] = relationship(lazy="joined")


class NwtaEvent(TimestampMixin, Base):
    __tablename__ = "nwta_events"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), primary_key=True
    )
    rookies: Mapped[list[str]] = mapped_column(JSONType, default=list)
    elders: Mapped[list[str]] = mapped_column(JSONType, default=list)
    mos: Mapped[list[str]] = mapped_column(JSONType, default=list)

    event: Mapped[Event] = relationship(lazy="joined")
