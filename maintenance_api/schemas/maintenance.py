"""Maintenance Schemas — Pydantic models for the configuration tree at the API boundary.

Invariants:
    - Wire names: id, number, description, name, itemData, value, Settings, Items,
      DataVariants, plus back-pointers maintenanceId, settingId, settingItemId
    - Create drafts carry no identifiers; the store assigns every id
    - Requests accept either the wire alias or the Python attribute name
    - Request integers are 32-bit (INT32_MIN..INT32_MAX); larger values are a 400,
      never a driver overflow

Design Decisions:
    - Aliases over renamed attributes: Python code stays snake_case while the wire
      format keeps its PascalCase collection names
    - Read models use from_attributes so routes can return ORM objects directly
"""

from pydantic import BaseModel, ConfigDict, Field

from maintenance_api.core.domain_types import INT32_MAX, INT32_MIN


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# --- Drafts (request bodies) -------------------------------------------------

class DataVariantCreate(_WireModel):
    """One allowed value for a SettingItem."""
    value: int = Field(ge=INT32_MIN, le=INT32_MAX)
    description: str = ""


class SettingItemDraft(_WireModel):
    """SettingItem as nested inside a Setting of a Maintenance draft."""
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    item_data: int = Field(0, alias="itemData", ge=INT32_MIN, le=INT32_MAX)
    data_variants: list[DataVariantCreate] = Field(
        default_factory=list, alias="DataVariants",
    )


class SettingItemCreate(SettingItemDraft):
    """Standalone SettingItem create — attaches to an existing Setting."""
    setting_id: int = Field(alias="settingId", ge=INT32_MIN, le=INT32_MAX)


class SettingCreate(_WireModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    items: list[SettingItemDraft] = Field(default_factory=list, alias="Items")


class MaintenanceCreate(_WireModel):
    """Full aggregate draft — Settings, Items and DataVariants created in one go."""
    number: int = Field(ge=INT32_MIN, le=INT32_MAX)
    description: str = ""
    settings: list[SettingCreate] = Field(default_factory=list, alias="Settings")


class MaintenanceUpdate(_WireModel):
    """Full replace of top-level Maintenance fields. Nested lists are ignored."""
    id: int | None = Field(None, ge=INT32_MIN, le=INT32_MAX)
    number: int = Field(ge=INT32_MIN, le=INT32_MAX)
    description: str = ""


# --- Responses ---------------------------------------------------------------

class DataVariantRead(_WireModel):
    id: int
    setting_item_id: int = Field(alias="settingItemId")
    value: int
    description: str


class SettingItemRead(_WireModel):
    id: int
    setting_id: int = Field(alias="settingId")
    name: str
    description: str
    item_data: int = Field(alias="itemData")
    data_variants: list[DataVariantRead] = Field(alias="DataVariants")


class SettingRead(_WireModel):
    id: int
    maintenance_id: int = Field(alias="maintenanceId")
    name: str
    description: str
    items: list[SettingItemRead] = Field(alias="Items")


class MaintenanceRead(_WireModel):
    """Fully hydrated Maintenance aggregate."""
    id: int
    number: int
    description: str
    settings: list[SettingRead] = Field(alias="Settings")
