"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2025-09-14

Creates all tables for the gift registry:
event_config, guests, gifts, contributions, contribution_decisions,
profiles, revoked_tokens.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

verification_status = sa.Enum("pending", "verified", "rejected", name="verificationstatus")
role = sa.Enum("admin", "moderator", "guest", name="role")


def upgrade() -> None:
    # --- event_config ---
    op.create_table(
        "event_config",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("singleton", sa.Boolean, nullable=False, unique=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("pix_key", sa.String(255), nullable=False),
        sa.Column("access_code", sa.String(64), nullable=False),
        sa.Column("welcome_message", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- guests ---
    op.create_table(
        "guests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("access_code_used", sa.String(64), nullable=False),
        sa.Column("session_id", sa.String(64), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- gifts ---
    op.create_table(
        "gifts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("suggested_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("is_selected", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("selected_by", sa.String(36), sa.ForeignKey("guests.id", ondelete="SET NULL"), nullable=True),
        sa.Column("selected_by_name", sa.String(200), nullable=True),
        sa.Column("selected_by_phone", sa.String(50), nullable=True),
        sa.Column("selected_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_gifts_created_at", "gifts", ["created_at"])

    # --- contributions ---
    op.create_table(
        "contributions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("contributor_name", sa.String(200), nullable=False),
        sa.Column("contributor_phone", sa.String(50), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("receipt_url", sa.String(500), nullable=False),
        sa.Column("status", verification_status, nullable=False, server_default="pending"),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_contributions_amount_positive"),
        sa.CheckConstraint("receipt_url <> ''", name="ck_contributions_receipt_present"),
    )

    # --- contribution_decisions ---
    op.create_table(
        "contribution_decisions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("contribution_id", sa.String(36), sa.ForeignKey("contributions.id"), nullable=False),
        sa.Column("actor_user_id", sa.String(64), nullable=False),
        sa.Column("from_status", verification_status, nullable=False),
        sa.Column("to_status", verification_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_contribution_decisions_contribution_id", "contribution_decisions", ["contribution_id"])

    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False, unique=True),
        sa.Column("role", role, nullable=False, server_default="guest"),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- revoked_tokens ---
    op.create_table(
        "revoked_tokens",
        sa.Column("jti", sa.String(64), primary_key=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("revoked_tokens")
    op.drop_table("profiles")
    op.drop_index("ix_contribution_decisions_contribution_id", table_name="contribution_decisions")
    op.drop_table("contribution_decisions")
    op.drop_table("contributions")
    op.drop_index("ix_gifts_created_at", table_name="gifts")
    op.drop_table("gifts")
    op.drop_table("guests")
    op.drop_table("event_config")
    verification_status.drop(op.get_bind(), checkfirst=True)
    role.drop(op.get_bind(), checkfirst=True)
