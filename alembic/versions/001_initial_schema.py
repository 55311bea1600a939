"""Initial schema — maintenances, settings, setting_items, data_variants.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Child tables carry a non-nullable FK to their owner. No ON DELETE CASCADE:
MaintenanceStore deletes subtrees explicitly, bottom-up, in one transaction.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "maintenances",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("number", sa.Integer, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "settings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("maintenance_id", sa.Integer, sa.ForeignKey("maintenances.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_settings_maintenance_id", "settings", ["maintenance_id"])

    op.create_table(
        "setting_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("setting_id", sa.Integer, sa.ForeignKey("settings.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("item_data", sa.Integer, nullable=False, server_default="0"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_setting_items_setting_id", "setting_items", ["setting_id"])

    op.create_table(
        "data_variants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("setting_item_id", sa.Integer, sa.ForeignKey("setting_items.id"), nullable=False),
        sa.Column("value", sa.Integer, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_data_variants_setting_item_id", "data_variants", ["setting_item_id"])


def downgrade() -> None:
    op.drop_index("ix_data_variants_setting_item_id", table_name="data_variants")
    op.drop_table("data_variants")
    op.drop_index("ix_setting_items_setting_id", table_name="setting_items")
    op.drop_table("setting_items")
    op.drop_index("ix_settings_maintenance_id", table_name="settings")
    op.drop_table("settings")
    op.drop_table("maintenances")
