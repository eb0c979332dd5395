"""Initial migration: locations, location_variants and location_submissions tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "locations",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("latitude", sa.Double, nullable=False),
        sa.Column("longitude", sa.Double, nullable=False),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_locations"),
        sa.UniqueConstraint("name", "address", "latitude", "longitude", name="uq_location_natural_key"),
    )
    op.create_index("ix_locations_name", "locations", ["name"])

    op.create_table(
        "location_variants",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("location_id", sa.Uuid, nullable=False),
        sa.Column("variant_name", sa.String(255), nullable=False),
        sa.Column("first_reported_by", sa.String(100), nullable=False),
        sa.Column("first_reported_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_confirmed_by", sa.String(100), nullable=False),
        sa.Column("last_confirmed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("confirmation_count", sa.Integer, nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id", name="pk_location_variants"),
        sa.ForeignKeyConstraint(
            ["location_id"],
            ["locations.id"],
            name="fk_location_variants_location_id_locations",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("location_id", "variant_name", name="uq_location_variant"),
    )
    op.create_index("ix_location_variants_location_id", "location_variants", ["location_id"])
    op.create_index("ix_location_variants_variant_name", "location_variants", ["variant_name"])

    op.create_table(
        "location_submissions",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("location_id", sa.Uuid, nullable=False),
        sa.Column("submitted_by", sa.String(100), nullable=False),
        sa.Column("submission_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_update", sa.Boolean, nullable=False),
        sa.Column("variants", sa.JSON().with_variant(JSONB, "postgresql"), nullable=False),
        sa.Column("price_range", sa.String(100), nullable=True),
        sa.Column("opening_hours", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_location_submissions"),
        sa.ForeignKeyConstraint(
            ["location_id"],
            ["locations.id"],
            name="fk_location_submissions_location_id_locations",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_location_submissions_location_id", "location_submissions", ["location_id"])
    op.create_index("ix_location_submissions_submission_time", "location_submissions", ["submission_time"])


def downgrade() -> None:
    op.drop_index("ix_location_submissions_submission_time", table_name="location_submissions")
    op.drop_index("ix_location_submissions_location_id", table_name="location_submissions")
    op.drop_table("location_submissions")
    op.drop_index("ix_location_variants_variant_name", table_name="location_variants")
    op.drop_index("ix_location_variants_location_id", table_name="location_variants")
    op.drop_table("location_variants")
    op.drop_index("ix_locations_name", table_name="locations")
    op.drop_table("locations")
