"""Variant model: a product variant reported at a location, with provenance."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from variant_map.models.base import Base, UUIDMixin


class Variant(Base, UUIDMixin):
    """A ``(location_id, variant_name)`` fact.

    ``first_reported_*`` is written once on insert. ``last_confirmed_*`` and
    ``confirmation_count`` move forward each time a submission repeats the name.
    Names are compared by exact string equality.
    """

    __tablename__ = "location_variants"

    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    variant_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_reported_by: Mapped[str] = mapped_column(String(100), nullable=False)
    first_reported_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_confirmed_by: Mapped[str] = mapped_column(String(100), nullable=False)
    last_confirmed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    confirmation_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")

    location = relationship("Location", back_populates="variants", lazy="raise")

    __table_args__ = (UniqueConstraint("location_id", "variant_name", name="uq_location_variant"),)
