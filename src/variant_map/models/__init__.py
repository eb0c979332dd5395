"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from variant_map.models.location import Location
from variant_map.models.submission import Submission
from variant_map.models.variant import Variant

__all__ = [
    "Location",
    "Submission",
    "Variant",
]
