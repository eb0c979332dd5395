"""Submission model: append-only record of each user submission."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from variant_map.models.base import Base, UUIDMixin, utcnow


class Submission(Base, UUIDMixin):
    """Immutable audit record of one reported variant set. Write-only (no updates).

    Rows disappear only when their parent location is deleted by an admin.
    """

    __tablename__ = "location_submissions"

    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    submitted_by: Mapped[str] = mapped_column(String(100), nullable=False)
    submission_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    is_update: Mapped[bool] = mapped_column(Boolean, nullable=False)
    variants: Mapped[list[str]] = mapped_column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    price_range: Mapped[str | None] = mapped_column(String(100), nullable=True)
    opening_hours: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    location = relationship("Location", back_populates="submissions", lazy="raise")
