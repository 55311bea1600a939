"""Setting ORM — a named group of SettingItems within a Maintenance.

Invariants:
    - Always belongs to a Maintenance (maintenance_id FK, non-nullable)
    - items are ordered by id (insertion order)
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_api.db.base import Base


class Setting(Base):
    """Setting entity — groups the items of one maintenance concern."""
    __tablename__ = "settings"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    maintenance_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("maintenances.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    maintenance: Mapped["Maintenance"] = relationship(
        "Maintenance", back_populates="settings",
    )
    items: Mapped[list["SettingItem"]] = relationship(
        "SettingItem", back_populates="setting",
        order_by="SettingItem.id", lazy="selectin",
    )
