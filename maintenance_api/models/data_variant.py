"""DataVariant ORM — one allowed, named value for a SettingItem.

Invariants:
    - Always belongs to a SettingItem (setting_item_id FK, non-nullable)
    - value need not be unique within an item
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_api.db.base import Base


class DataVariant(Base):
    """DataVariant entity — a named choice for SettingItem.item_data."""
    __tablename__ = "data_variants"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    setting_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("setting_items.id"), nullable=False, index=True,
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    setting_item: Mapped["SettingItem"] = relationship(
        "SettingItem", back_populates="data_variants",
    )
