"""Location model: one row per distinct physical site, keyed by its natural key."""

from sqlalchemy import Double, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from variant_map.models.base import Base, TimestampMixin, UUIDMixin


class Location(Base, UUIDMixin, TimestampMixin):
    """A retail site where product variants are reported.

    ``(name, address, latitude, longitude)`` is the natural key used to
    deduplicate submissions. Matching is exact; no fuzzy or geohash bucketing.
    """

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    variants = relationship(
        "Variant",
        back_populates="location",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    submissions = relationship(
        "Submission",
        back_populates="location",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("name", "address", "latitude", "longitude", name="uq_location_natural_key"),
    )
