"""initial membership schema

Revision ID: 5d2e8f1a9c3b
Revises:
Create Date: 2026-10-18 10:12:41.208315

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d2e8f1a9c3b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create members, subcommittees, roster, events, attendance, resources and public_contacts."""
    # Check if tables already exist (idempotent)
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "members" not in existing_tables:
        op.create_table(
            "members",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("first_name", sa.String(100), nullable=False),
            sa.Column("last_name", sa.String(100), nullable=False),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("phone", sa.String(32), nullable=True),
            sa.Column("password_hash", sa.String(255), nullable=True),
            sa.Column("role", sa.String(16), nullable=False, server_default="member"),
            sa.Column("status", sa.String(16), nullable=False, server_default="active"),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "subcommittees" not in existing_tables:
        op.create_table(
            "subcommittees",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False, unique=True),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("meeting_schedule", sa.String(255), nullable=True),
            sa.Column("chair_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
            sa.Column("vice_chair_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "member_subcommittees" not in existing_tables:
        op.create_table(
            "member_subcommittees",
            sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="CASCADE"), primary_key=True),
            sa.Column(
                "subcommittee_id", sa.Integer(), sa.ForeignKey("subcommittees.id", ondelete="CASCADE"), primary_key=True
            ),
            sa.Column("joined_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "events" not in existing_tables:
        op.create_table(
            "events",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("start_datetime", sa.DateTime(), nullable=False),
            sa.Column("end_datetime", sa.DateTime(), nullable=True),
            sa.Column("location", sa.String(255), nullable=True),
            sa.Column(
                "associated_subcommittee_id",
                sa.Integer(),
                sa.ForeignKey("subcommittees.id", ondelete="SET NULL"),
                nullable=True,
            ),
            sa.Column("created_by", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_events_start_datetime", "events", ["start_datetime"])
        op.create_index("idx_events_subcommittee", "events", ["associated_subcommittee_id"])

    if "attendance" not in existing_tables:
        op.create_table(
            "attendance",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
            sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="CASCADE"), nullable=False),
            sa.Column("status", sa.String(32), nullable=False),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("recorded_by", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("event_id", "member_id", name="uq_attendance_event_member"),
        )

    if "resources" not in existing_tables:
        op.create_table(
            "resources",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("url", sa.String(2048), nullable=True),
            sa.Column("category", sa.String(128), nullable=True),
            sa.Column("scope", sa.String(64), nullable=True),
            sa.Column(
                "subcommittee_id", sa.Integer(), sa.ForeignKey("subcommittees.id", ondelete="SET NULL"), nullable=True
            ),
            sa.Column("created_by", sa.Integer(), sa.ForeignKey("members.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_resources_scope", "resources", ["scope"])
        op.create_index("idx_resources_subcommittee", "resources", ["subcommittee_id"])

    if "public_contacts" not in existing_tables:
        op.create_table(
            "public_contacts",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("first_name", sa.String(100), nullable=False),
            sa.Column("last_name", sa.String(100), nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("phone", sa.String(32), nullable=True),
            sa.Column("county_or_city", sa.String(255), nullable=True),
            sa.Column("system_impact", sa.String(32), nullable=False),
            sa.Column("involvement_interest", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )


def downgrade() -> None:
    op.drop_table("public_contacts")
    op.drop_index("idx_resources_subcommittee", table_name="resources")
    op.drop_index("idx_resources_scope", table_name="resources")
    op.drop_table("resources")
    op.drop_table("attendance")
    op.drop_index("idx_events_subcommittee", table_name="events")
    op.drop_index("idx_events_start_datetime", table_name="events")
    op.drop_table("events")
    op.drop_table("member_subcommittees")
    op.drop_table("subcommittees")
    op.drop_table("members")
