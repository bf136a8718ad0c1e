"""units, inventory_items, cablestock_snapshots

Revision ID: 5b1c7e2a9d40
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "5b1c7e2a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "units",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("ip", sa.String(length=15), nullable=False, server_default=""),
        sa.Column("type", sa.String(length=16), nullable=False, server_default="employee"),
        sa.Column("shared_computer", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("primary_user", sa.String(length=255), nullable=True),
        sa.Column("attributes", JSON_TYPE, nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_units")),
        sa.UniqueConstraint("name", name="uq_units_name"),
    )
    op.create_index(op.f("ix_units_primary_user"), "units", ["primary_user"], unique=False)
    op.create_index(
        "uq_units_ip_owned",
        "units",
        ["ip"],
        unique=True,
        postgresql_where=sa.text("shared_computer = false AND ip <> ''"),
        sqlite_where=sa.text("shared_computer = 0 AND ip <> ''"),
    )

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("item", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=32), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("eos", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_inventory_items")),
        sa.UniqueConstraint("item", "location", name="uq_inventory_items_item_location"),
    )
    op.create_index(op.f("ix_inventory_items_item"), "inventory_items", ["item"], unique=False)
    op.create_index(op.f("ix_inventory_items_location"), "inventory_items", ["location"], unique=False)

    op.create_table(
        "cablestock_snapshots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("items", JSON_TYPE, nullable=False),
        sa.Column("upload_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cablestock_snapshots")),
        sa.UniqueConstraint("month", name="uq_cablestock_snapshots_month"),
    )


def downgrade() -> None:
    op.drop_table("cablestock_snapshots")
    op.drop_index(op.f("ix_inventory_items_location"), table_name="inventory_items")
    op.drop_index(op.f("ix_inventory_items_item"), table_name="inventory_items")
    op.drop_table("inventory_items")
    op.drop_index("uq_units_ip_owned", table_name="units")
    op.drop_index(op.f("ix_units_primary_user"), table_name="units")
    op.drop_table("units")
