"""
cms/models/ -- Pydantic v2 models for the content engine.

Submodules:
    base        Domain entities (content, media, schemas, users, data types).
    editing     View models produced by the projectors.
    values      Tagged stored-value variant for upload properties.
    validators  Mandatory / pattern checks on property values.
"""

from cms.models.base import (
    Content,
    ContentBase,
    ContentType,
    ContentTypeBase,
    DataTypeDefinition,
    Media,
    MediaType,
    Property,
    PropertyGroup,
    PropertyType,
    User,
)

__all__ = [
    "Content",
    "ContentBase",
    "ContentType",
    "ContentTypeBase",
    "DataTypeDefinition",
    "Media",
    "MediaType",
    "Property",
    "PropertyGroup",
    "PropertyType",
    "User",
]
