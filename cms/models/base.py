"""
cms/models/base.py -- Domain entities for content and media.

These are the shapes the persistence layer loads and the projectors read:

    PropertyType     schema for one property (alias, validation, data type)
    PropertyGroup    a named partition of a content type ("tab")
    ContentTypeBase  groups + property types (ContentType, MediaType)
    Property         a (PropertyType, value) pair on one entity
    ContentBase      identity + properties (Content, Media)
    User             back-office user, referenced as an entity's owner
    DataTypeDefinition  a configured instance of a property editor
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ------------------------------------------------------------------
# Schema
# ------------------------------------------------------------------

class DataTypeDefinition(BaseModel):
    """A configured property editor, referenced by property types by id."""

    id: int
    name: str = ""
    property_editor_alias: str
    database_type: str = "Ntext"


class PropertyGroup(BaseModel):
    id: int
    name: str
    sort_order: int = 0


class PropertyType(BaseModel):
    """Schema for a single property.

    ``property_group_id`` is ``None`` for properties that belong to no group;
    those end up on the generic properties tab.
    """

    id: int = 0
    alias: str
    name: str = ""
    description: str = ""
    mandatory: bool = False
    validation_regexp: str = ""
    data_type_definition_id: int
    property_group_id: Optional[int] = None
    sort_order: int = 0


class ContentTypeBase(BaseModel):
    id: int = 0
    alias: str
    name: str = ""
    icon: str = ""
    property_groups: list[PropertyGroup] = Field(default_factory=list)
    property_types: list[PropertyType] = Field(default_factory=list)

    def get_property_group(self, name: str) -> PropertyGroup | None:
        for group in self.property_groups:
            if group.name == name:
                return group
        return None

    def add_property_group(self, name: str) -> PropertyGroup:
        """Add a group named *name* (or return the existing one)."""
        existing = self.get_property_group(name)
        if existing is not None:
            return existing
        next_id = max((g.id for g in self.property_groups), default=0) + 1
        next_sort = max((g.sort_order for g in self.property_groups), default=-1) + 1
        group = PropertyGroup(id=next_id, name=name, sort_order=next_sort)
        self.property_groups.append(group)
        return group

    def add_property_type(
        self,
        property_type: PropertyType,
        group_name: str | None = None,
    ) -> PropertyType:
        """Add *property_type*, optionally into the group *group_name*.

        Raises ``ValueError`` if the alias is already used on this type.
        """
        if any(pt.alias == property_type.alias for pt in self.property_types):
            raise ValueError(
                f"Content type '{self.alias}' already has a property "
                f"with alias '{property_type.alias}'."
            )
        if group_name is not None:
            group = self.add_property_group(group_name)
            property_type.property_group_id = group.id
        self.property_types.append(property_type)
        return property_type

    def ungrouped_property_types(self) -> list[PropertyType]:
        return [pt for pt in self.property_types if pt.property_group_id is None]


class ContentType(ContentTypeBase):
    pass


class MediaType(ContentTypeBase):
    pass


# ------------------------------------------------------------------
# Entities
# ------------------------------------------------------------------

class Property(BaseModel):
    """A property value on one content or media item."""

    id: int = 0
    property_type: PropertyType
    value: Any = None

    @property
    def alias(self) -> str:
        return self.property_type.alias


class ContentBase(BaseModel):
    """Shared identity and property handling for content and media.

    ``creator_id`` is the owner reference; it is resolved to a user only
    when the entity is projected.
    """

    id: int = 0
    key: uuid.UUID = Field(default_factory=uuid.uuid4)
    parent_id: int = -1
    name: str = ""
    create_date: datetime = Field(default_factory=_now)
    update_date: datetime = Field(default_factory=_now)
    creator_id: int = 0
    content_type: ContentTypeBase
    properties: list[Property] = Field(default_factory=list)

    @classmethod
    def from_type(
        cls,
        content_type: ContentTypeBase,
        name: str,
        parent_id: int = -1,
        creator_id: int = 0,
    ):
        """Create an entity with one empty property per property type."""
        return cls(
            name=name,
            parent_id=parent_id,
            creator_id=creator_id,
            content_type=content_type,
            properties=[Property(property_type=pt) for pt in content_type.property_types],
        )

    @property
    def property_groups(self) -> list[PropertyGroup]:
        return self.content_type.property_groups

    @property
    def content_type_alias(self) -> str:
        return self.content_type.alias

    def get_property(self, alias: str) -> Property | None:
        for prop in self.properties:
            if prop.alias == alias:
                return prop
        return None

    def has_property(self, alias: str) -> bool:
        return self.get_property(alias) is not None

    def get_value(self, alias: str, default: Any = None) -> Any:
        prop = self.get_property(alias)
        return default if prop is None else prop.value

    def set_value(self, alias: str, value: Any) -> None:
        """Set the value of the property *alias*.

        Raises ``KeyError`` if the entity has no such property.
        """
        prop = self.get_property(alias)
        if prop is None:
            raise KeyError(f"'{self.name}' has no property with alias '{alias}'.")
        prop.value = value


class Content(ContentBase):
    pass


class Media(ContentBase):
    pass


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------

class User(BaseModel):
    id: int
    name: str
    username: str = ""
    email: str = ""
