"""Restaurants table with borough indexes and the name/location unique key.

Revision ID: 001_restaurants
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_restaurants"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("address_street", sa.Text, nullable=False),
        sa.Column("address_city", sa.Text, nullable=False),
        sa.Column("address_state", sa.Text, nullable=False),
        sa.Column("address_zip_code", sa.Text, nullable=False),
        sa.Column("address_borough", sa.Text, nullable=True),
        sa.Column("borough", sa.Text, nullable=True),
        sa.Column("cuisine", sa.String(20), nullable=False),
        sa.Column("phone", sa.String(14), nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("rating", sa.Float, nullable=False, server_default="1"),
        sa.Column("price_range", sa.String(4), nullable=False, server_default="$$"),
        sa.Column("hours", sa.JSON, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "name", "address_street", "address_zip_code",
            name="uq_restaurants_name_location",
        ),
    )
    op.create_index("ix_restaurants_borough", "restaurants", ["borough"])
    op.create_index("ix_restaurants_address_borough", "restaurants", ["address_borough"])


def downgrade() -> None:
    op.drop_index("ix_restaurants_address_borough", table_name="restaurants")
    op.drop_index("ix_restaurants_borough", table_name="restaurants")
    op.drop_table("restaurants")
