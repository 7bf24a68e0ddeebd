import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emma.db.base import Base, JSONType
from emma.models.geography import Area, Community
from emma.models.mixins import ActiveMixin, TimestampMixin


class Address(TimestampMixin, Base):
    __tablename__ = "addresses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    address_1: Mapped[str] = mapped_column(Text)
    address_2: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str] = mapped_column(Text, index=True)
    state: Mapped[str] = mapped_column(Text)
    country: Mapped[str] = mapped_column(Text, default="United States")
    postal_code: Mapped[str] = mapped_column(Text, index=True)


class Person(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "people"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(Text)
    middle_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_name: Mapped[str] = mapped_column(Text, index=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    billing_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    mailing_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    physical_address_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    deceased_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    mkpconnect_data: Mapped[dict | None] = mapped_column(JSONType, nullable=True)


class Warrior(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "warriors"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("people.id", ondelete="CASCADE"), primary_key=True
    )
    log_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    initiation_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )
    initiation_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    inner_essence_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    training_events: Mapped[list[str]] = mapped_column(JSONType, default=list)
    staffed_events: Mapped[list[str]] = mapped_column(JSONType, default=list)
    lead_events: Mapped[list[str]] = mapped_column(JSONType, default=list)
    mos_events: Mapped[list[str]] = mapped_column(JSONType, default=list)
    area_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("areas.id"), nullable=True, index=True
    )
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("communities.id"), nullable=True, index=True
    )

    person: Mapped[Person] = relationship(lazy="joined")
    area: Mapped[Area | None] = relationship(lazy="joined")
    community: Mapped[Community | None] = relationship(lazy="joined")
