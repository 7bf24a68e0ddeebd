import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from emma.db.base import Base, JSONType
from emma.models.mixins import ActiveMixin, TimestampMixin


class Area(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "areas"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, index=True)
    code: Mapped[str] = mapped_column(String(6), unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    steward_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id"), nullable=True
    )
    finance_coordinator_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id"), nullable=True
    )
    geo_polygon: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(Text, default="#3B82F6")

    admins: Mapped[list["Person"]] = relationship(  # noqa: F821
        secondary="area_admins", viewonly=True, lazy="selectin"
    )


class AreaAdmin(Base):
    __tablename__ = "area_admins"
    __table_args__ = (
        UniqueConstraint("area_id", "person_id", name="uq_area_admins_area_person"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    area_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("areas.id", ondelete="CASCADE"), index=True
    )
    person_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("people.id", ondelete="CASCADE"), index=True
    )


class Community(ActiveMixin, TimestampMixin, Base):
    __tablename__ = "communities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text)
    code: Mapped[str] = mapped_column(String(12), unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    area_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("areas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    coordinator_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"), nullable=True
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    geo_json: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    geo_definition: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    color: Mapped[str | None] = mapped_column(Text, default="#10B981")

    area: Mapped[Area | None] = relationship(lazy="joined")
