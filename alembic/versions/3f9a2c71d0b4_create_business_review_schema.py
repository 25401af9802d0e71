"""Create business review schema

Revision ID: 3f9a2c71d0b4
Revises:
Create Date: 2026-10-18 09:12:44.120381
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "3f9a2c71d0b4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

verification_status = sa.Enum(
    "pending", "under_review", "approved", "rejected", "suspended",
    name="business_verification_status",
)
review_action = sa.Enum(
    "approve", "reject", "request_more_info", "suspend", "resume", "comment",
    name="business_review_action",
)
promotion_type = sa.Enum("discount", "contest", "event", "challenge", name="business_promotion_type")
promotion_scope = sa.Enum("business", "location", name="business_promotion_scope")
promotion_status = sa.Enum(
    "draft", "scheduled", "active", "expired", "cancelled",
    name="business_promotion_status",
)
location_admin_role = sa.Enum("owner", "manager", "staff", name="location_admin_role")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "business_registration_requests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("business_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("tax_id", sa.Text(), nullable=True),
        sa.Column("document_urls", postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("is_multi_user_team", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("status", verification_status, server_default="pending", nullable=False),
        sa.Column("owner_email", sa.Text(), nullable=False),
        sa.Column("owner_username", sa.Text(), nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("reviewer_notes", sa.Text(), nullable=True),
        sa.Column("reviewer_id", sa.Uuid(), nullable=True),
        sa.Column("reviewer_name", sa.Text(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_business_registration_requests_user_id", "business_registration_requests", ["user_id"])
    op.create_index("ix_business_registration_requests_status", "business_registration_requests", ["status"])
    op.create_index(
        "ix_business_registration_requests_submitted_at", "business_registration_requests", ["submitted_at"]
    )

    op.create_table(
        "business_review_events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=False),
        sa.Column("reviewer_id", sa.Uuid(), nullable=True),
        sa.Column("reviewer_name", sa.Text(), nullable=True),
        sa.Column("action", review_action, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["registration_id"], ["business_registration_requests.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_review_events_registration_created", "business_review_events", ["registration_id", "created_at"]
    )

    op.create_table(
        "businesses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=True),
        sa.Column("owner_user_id", sa.Uuid(), nullable=False),
        sa.Column("business_name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("tax_id", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["registration_id"], ["business_registration_requests.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registration_id"),
    )
    op.create_index("ix_businesses_owner_user_id", "businesses", ["owner_user_id"])

    op.create_table(
        "business_locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=False),
        sa.Column("business_id", sa.Uuid(), nullable=True),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("formatted_address", sa.Text(), nullable=False),
        sa.Column("street", sa.Text(), nullable=True),
        sa.Column("city", sa.Text(), nullable=True),
        sa.Column("state_region", sa.Text(), nullable=True),
        sa.Column("postal_code", sa.Text(), nullable=True),
        sa.Column("country", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("google_place_id", sa.Text(), nullable=True),
        sa.Column("timezone", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["registration_id"], ["business_registration_requests.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_business_locations_registration_id", "business_locations", ["registration_id"])
    op.create_index(
        "idx_business_locations_primary_unique",
        "business_locations",
        ["registration_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    op.create_table(
        "business_location_admins",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("user_email", sa.Text(), nullable=False),
        sa.Column("user_username", sa.Text(), nullable=False),
        sa.Column("role", location_admin_role, server_default="staff", nullable=False),
        sa.Column("granted_by", sa.Uuid(), nullable=True),
        sa.Column("granted_by_username", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("granted_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["location_id"], ["business_locations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("location_id", "user_id", name="unique_location_user"),
    )
    op.create_index("ix_business_location_admins_user_id", "business_location_admins", ["user_id"])

    op.create_table(
        "business_promotions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("promotion_type", promotion_type, nullable=False),
        sa.Column("scope", promotion_scope, server_default="business", nullable=False),
        sa.Column("status", promotion_status, server_default="draft", nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("prize", sa.Text(), nullable=True),
        sa.Column("reward_points", sa.Integer(), server_default="0", nullable=False),
        sa.Column("discount_percent", sa.Integer(), nullable=True),
        sa.Column("max_claims", sa.Integer(), nullable=True),
        sa.Column("per_user_limit", sa.Integer(), nullable=True),
        sa.Column("total_claims", sa.Integer(), server_default="0", nullable=False),
        sa.Column("requires_check_in", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("requires_purchase", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("terms", sa.Text(), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("updated_by", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["registration_id"], ["business_registration_requests.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("ends_at > starts_at", name="business_promotions_schedule_check"),
        sa.CheckConstraint(
            "discount_percent IS NULL OR (discount_percent >= 0 AND discount_percent <= 100)",
            name="business_promotions_discount_check",
        ),
    )
    op.create_index("ix_business_promotions_registration_id", "business_promotions", ["registration_id"])
    op.create_index("idx_business_promotions_schedule", "business_promotions", ["starts_at", "ends_at"])

    op.create_table(
        "business_promotion_locations",
        sa.Column("promotion_id", sa.Uuid(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["promotion_id"], ["business_promotions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["location_id"], ["business_locations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("promotion_id", "location_id"),
    )
    op.create_index("idx_promotion_locations_location", "business_promotion_locations", ["location_id"])

    op.create_table(
        "business_companies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_user_id", sa.Uuid(), nullable=False),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("tax_id", sa.Text(), nullable=True),
        sa.Column("legal_entity_type", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_business_companies_owner_user_id", "business_companies", ["owner_user_id"])

    op.create_table(
        "business_units",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=True),
        sa.Column("business_id", sa.Uuid(), nullable=True),
        sa.Column("unit_name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["company_id"], ["business_companies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["registration_id"], ["business_registration_requests.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("business_id"),
    )
    op.create_index("idx_business_units_company", "business_units", ["company_id"])
    op.create_index(
        "idx_business_units_primary_unique",
        "business_units",
        ["company_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("business_units")
    op.drop_table("business_companies")
    op.drop_table("business_promotion_locations")
    op.drop_table("business_promotions")
    op.drop_table("business_location_admins")
    op.drop_table("business_locations")
    op.drop_table("businesses")
    op.drop_table("business_review_events")
    op.drop_table("business_registration_requests")

    bind = op.get_bind()
    for enum_type in (
        location_admin_role,
        promotion_status,
        promotion_scope,
        promotion_type,
        review_action,
        verification_status,
    ):
        enum_type.drop(bind, checkfirst=True)
