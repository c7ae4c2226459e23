"""initial schema: applications, vendors, files, audit trail

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "vendor_applications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("vendor_category", sa.String(100), nullable=True),
        sa.Column("vendor_subcategories", sa.JSON(), nullable=False),
        sa.Column("business_description", sa.Text(), nullable=True),
        sa.Column("vendor_story", sa.Text(), nullable=True),
        sa.Column("other_services", sa.Text(), nullable=True),
        sa.Column("primary_location", sa.String(500), nullable=True),
        sa.Column("areas_served", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("social_links", sa.JSON(), nullable=True),
        sa.Column("starting_price", sa.String(100), nullable=True),
        sa.Column("pricing_model", sa.String(50), nullable=True),
        sa.Column("starting_price_includes", sa.Text(), nullable=True),
        sa.Column("minimum_booking_requirement", sa.Text(), nullable=True),
        sa.Column("advance_booking_notice", sa.String(255), nullable=True),
        sa.Column("setup_time_required", sa.String(255), nullable=True),
        sa.Column("breakdown_time_required", sa.String(255), nullable=True),
        sa.Column("outdoor_experience", sa.Boolean(), nullable=True),
        sa.Column("destination_wedding_experience", sa.Boolean(), nullable=True),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        sa.Column("category_specific", sa.JSON(), nullable=True),
        sa.Column("real_work_images", sa.JSON(), nullable=False),
        sa.Column("verification_document_type", sa.String(100), nullable=True),
        sa.Column("verification_document_url", sa.String(500), nullable=True),
        sa.Column("terms_accepted", sa.Boolean(), nullable=False),
        sa.Column("terms_accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verification_document_uploaded", sa.Boolean(), nullable=False),
        sa.Column("verified_by", sa.String(255), nullable=True),
        sa.Column("date_verified", sa.DateTime(timezone=True), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("verification_complete", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("vendor_type", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendor_applications_user_id", "vendor_applications", ["user_id"])
    op.create_index("ix_vendor_applications_vendor_category", "vendor_applications", ["vendor_category"])
    op.create_index("ix_vendor_applications_status", "vendor_applications", ["status"])
    op.create_index("ix_vendor_applications_submitted_at", "vendor_applications", ["submitted_at"])

    op.create_table(
        "vendors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("rating", sa.Numeric(2, 1), nullable=False),
        sa.Column("price_range", sa.String(120), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("social_links", sa.JSON(), nullable=True),
        sa.Column("story", sa.Text(), nullable=True),
        sa.Column("other_services", sa.Text(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendors_name", "vendors", ["name"])
    op.create_index("ix_vendors_category", "vendors", ["category"])
    op.create_index("ix_vendors_approved_at", "vendors", ["approved_at"])

    op.create_table(
        "vendor_files",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("file_category", sa.String(50), nullable=False),
        sa.Column("application_id", sa.String(36), nullable=True),
        sa.Column("original_name", sa.String(255), nullable=True),
        sa.Column("mime_type", sa.String(100), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("file_data", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_vendor_files_file_category", "vendor_files", ["file_category"])
    op.create_index("ix_vendor_files_application_id", "vendor_files", ["application_id"])

    op.create_table(
        "audit_trail",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("entity_type", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.String(36), nullable=True),
        sa.Column("old_value", sa.JSON(), nullable=True),
        sa.Column("new_value", sa.JSON(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_trail_user_id", "audit_trail", ["user_id"])
    op.create_index("ix_audit_trail_action", "audit_trail", ["action"])
    op.create_index("ix_audit_trail_entity_type", "audit_trail", ["entity_type"])
    op.create_index("ix_audit_trail_entity_id", "audit_trail", ["entity_id"])


def downgrade() -> None:
    op.drop_table("audit_trail")
    op.drop_table("vendor_files")
    op.drop_table("vendors")
    op.drop_table("vendor_applications")
