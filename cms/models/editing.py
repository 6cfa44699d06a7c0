"""
cms/models/editing.py -- View models handed to the back-office UI.

Three projections of the same entity:

    ContentItemBasic    identity + flat (alias, id, value) properties
    ContentItemDto      identity + flat, fully resolved properties
    ContentItemDisplay  identity + properties grouped into tabs

All of them are transient: built per request by ``cms.mapping`` and
discarded once serialized with ``model_dump()``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from cms.models.base import DataTypeDefinition

GENERIC_PROPERTIES_LABEL = "Generic properties"


class EditorReference(BaseModel):
    """Plugin metadata of the property editor a property is edited with."""

    alias: str
    name: str
    view: str
    value_type: str = "STRING"
    hide_label: bool = False


class UserBasic(BaseModel):
    user_id: int
    name: str


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------

class ContentPropertyBasic(BaseModel):
    id: int
    alias: str
    value: Any = None


class ContentPropertyDto(ContentPropertyBasic):
    """A fully resolved property record.

    ``data_type`` and ``editor`` are ``None`` only when resolution failed
    and the failure was recorded on the owning item's ``errors``.
    """

    is_required: bool = False
    validation_regexp: str = ""
    description: str = ""
    label: str = ""
    data_type: Optional[DataTypeDefinition] = None
    editor: Optional[EditorReference] = None


class Tab(BaseModel):
    id: int
    label: str
    alias: str
    is_active: bool = False
    sort_order: int = 0
    properties: list[ContentPropertyDto] = Field(default_factory=list)


# ------------------------------------------------------------------
# Items
# ------------------------------------------------------------------

class _ContentItemIdentity(BaseModel):
    id: int
    key: str
    parent_id: int
    name: str
    content_type_alias: str
    create_date: datetime
    update_date: datetime
    owner: UserBasic


class ContentItemBasic(_ContentItemIdentity):
    properties: list[ContentPropertyBasic] = Field(default_factory=list)


class ContentItemDto(_ContentItemIdentity):
    properties: list[ContentPropertyDto] = Field(default_factory=list)
    # alias -> message, for properties whose data type or editor did not resolve
    errors: dict[str, str] = Field(default_factory=dict)


class ContentItemDisplay(_ContentItemIdentity):
    tabs: list[Tab] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def properties(self) -> list[ContentPropertyDto]:
        """Every property across all tabs, in tab order."""
        return [p for tab in self.tabs for p in tab.properties]

    @property
    def active_tab(self) -> Tab | None:
        for tab in self.tabs:
            if tab.is_active:
                return tab
        return None

    def get_tab(self, label: str) -> Tab | None:
        for tab in self.tabs:
            if tab.label == label:
                return tab
        return None
