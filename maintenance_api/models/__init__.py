"""ORM Models — SQLAlchemy declarative models for the configuration tree.

Invariants:
    - All models inherit from Base (db/base.py)
    - Maintenance is the aggregate root; every child has exactly one owner FK

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from maintenance_api.models.maintenance import Maintenance  # noqa: F401
from maintenance_api.models.setting import Setting  # noqa: F401
from maintenance_api.models.setting_item import SettingItem  # noqa: F401
from maintenance_api.models.data_variant import DataVariant  # noqa: F401
