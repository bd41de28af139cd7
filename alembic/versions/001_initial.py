"""Initial migration with all tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create user_role enum
    user_role_enum = postgresql.ENUM(
        "admin", "member", name="user_role_enum", create_type=False
    )
    user_role_enum.create(op.get_bind(), checkfirst=True)

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("role", user_role_enum, nullable=False, server_default="member"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create carousel_items table; "order" is the unique display key
    op.create_table(
        "carousel_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("link", sa.String(2048), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order", name="uq_carousel_items_order"),
    )

    # Create heroes table
    op.create_table(
        "heroes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("button_content", sa.String(255), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create presentation_content table
    op.create_table(
        "presentation_content",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("section_name", sa.String(100), nullable=False),
        sa.Column("content_blocks", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("director_name", sa.String(255), nullable=True),
        sa.Column("director_position", sa.String(255), nullable=True),
        sa.Column("director_image", sa.String(500), nullable=True),
        sa.Column("counter1_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("counter1_label", sa.String(100), nullable=False, server_default="Permanents"),
        sa.Column("counter2_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("counter2_label", sa.String(100), nullable=False, server_default="Articles impactés"),
        sa.Column("counter3_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("counter3_label", sa.String(100), nullable=False, server_default="Articles publiés"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("section_name", name="uq_presentation_content_section_name"),
    )


def downgrade() -> None:
    op.drop_table("presentation_content")
    op.drop_table("heroes")
    op.drop_table("carousel_items")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    # Drop enum
    op.execute("DROP TYPE IF EXISTS user_role_enum")
