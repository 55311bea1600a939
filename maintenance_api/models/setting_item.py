"""SettingItem ORM — one configurable parameter and its active value.

Invariants:
    - Always belongs to a Setting (setting_id FK, non-nullable)
    - item_data must match a DataVariant value when any variants exist
      (enforced by core/enforce_variants.py before every write, not by the DB)
    - data_variants ordered by id; empty means item_data is unconstrained
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_api.db.base import Base


class SettingItem(Base):
    """SettingItem entity — active value plus its allowed variants."""
    __tablename__ = "setting_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    setting_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("settings.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    item_data: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    setting: Mapped["Setting"] = relationship(
        "Setting", back_populates="items",
    )
    data_variants: Mapped[list["DataVariant"]] = relationship(
        "DataVariant", back_populates="setting_item",
        order_by="DataVariant.id", lazy="selectin",
    )
