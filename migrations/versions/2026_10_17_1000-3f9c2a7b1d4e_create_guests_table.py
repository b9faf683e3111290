"""Create guests table.

Revision ID: 3f9c2a7b1d4e
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlalchemy_utils
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c2a7b1d4e"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

dinner_choice_enum = sa.Enum("raclette", "pierreChaudde", name="dinner_choice_enum")
dessert_choice_enum = sa.Enum("sorbet", "tarteMyrille", name="dessert_choice_enum")


def upgrade() -> None:
    """Create the guests table with its email and guest count constraints."""
    op.create_table(
        "guests",
        sa.Column("uuid", sqlalchemy_utils.types.uuid.UUIDType(binary=False), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_attending", sa.Boolean(), nullable=True),
        sa.Column("dinner_participation", sa.Boolean(), nullable=True),
        sa.Column("brunch_participation", sa.Boolean(), nullable=True),
        sa.Column("needs_accommodation", sa.Boolean(), nullable=True),
        sa.Column("dinner_choice", dinner_choice_enum, nullable=True),
        sa.Column("dessert_choice", dessert_choice_enum, nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=True),
        sa.Column("accommodation_dates", sa.Text(), nullable=False, server_default=""),
        sa.Column("comments", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("uuid", name="pk_guests"),
        sa.UniqueConstraint("email", name="uq_guests_email"),
        sa.CheckConstraint(
            "guest_count IS NULL OR (guest_count >= 1 AND guest_count <= 10)",
            name="ck_guests_guest_count_range",
        ),
    )
    op.create_index("ix_guests_created_at", "guests", ["created_at"])


def downgrade() -> None:
    """Drop the guests table and its enum types."""
    op.drop_index("ix_guests_created_at", table_name="guests")
    op.drop_table("guests")
    dessert_choice_enum.drop(op.get_bind(), checkfirst=True)
    dinner_choice_enum.drop(op.get_bind(), checkfirst=True)
