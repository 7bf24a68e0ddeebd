import uuid

from sqlalchemy import Boolean, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emma.db.base import Base, JSONType
from emma.models.mixins import ActiveMixin, TimestampMixin
from emma.models.people import Address


class Venue(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    mailing_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    physical_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    event_types: Mapped[list[str]] = mapped_column(JSONType, default=list)
    primary_contact_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"), nullable=True
    )
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_nudity: Mapped[bool] = mapped_column(Boolean, default=False)
    nudity_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_rejected: Mapped[bool] = mapped_column(Boolean, default=False)
    rejected_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_private_residence: Mapped[bool] = mapped_column(Boolean, default=False)
    area_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("areas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("communities.id", ondelete="SET NULL"), nullable=True, index=True
    )
    timezone: Mapped[str | None] = mapped_column(String(50), default="America/New_York")

    physical_address: Mapped[Address | None] = relationship(
        foreign_keys=[physical_address_id], lazy="joined"
    )
