"""Maintenance ORM — the aggregate root of the configuration tree.

Invariants:
    - id is an integer primary key assigned by the store, never reused
    - number is the caller-supplied maintenance task number (not unique)
    - settings are ordered by id (insertion order)

Design Decisions:
    - No ORM delete cascade: MaintenanceStore walks the tree explicitly so deletion
      does not depend on relationship configuration
    - lazy="selectin" on every level: one query per level hydrates a whole aggregate
    - sqlite_autoincrement: SQLite would otherwise reuse the highest deleted id
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_api.db.base import Base


class Maintenance(Base):
    """Maintenance aggregate root — owns Settings, which own the rest of the tree."""
    __tablename__ = "maintenances"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    settings: Mapped[list["Setting"]] = relationship(
        "Setting", back_populates="maintenance",
        order_by="Setting.id", lazy="selectin",
    )
