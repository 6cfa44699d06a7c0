"""
cms/config.py -- Settings for the content engine.

Settings live in a JSON document shaped like::

    {
        "content": {
            "imaging": {
                "imageFileTypes": ["jpeg", "jpg", "gif", "bmp", "png", "tiff", "tif"],
                "autoFillImageProperties": [
                    {
                        "alias": "umbracoFile",
                        "widthFieldAlias": "umbracoWidth",
                        "heightFieldAlias": "umbracoHeight",
                        "lengthFieldAlias": "umbracoBytes",
                        "extensionFieldAlias": "umbracoExtension"
                    }
                ]
            }
        },
        "imageCropper": {"persistLegacyRewrite": true},
        "media": {"root": null, "urlPrefix": "/media/"}
    }

The document is checked with ``jsonschema`` first so that a broken file
produces a readable message, then parsed into Pydantic models.  Every key is
optional; missing keys fall back to the defaults above.

Usage::

    from cms.config import load_settings

    settings = load_settings()                  # platform default location
    node = settings.content.imaging.get_autofill_node("umbracoFile")
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import jsonschema
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cms.errors import ConfigurationError
from cms.paths import get_media_root, get_settings_path
from cms.utils import safe_read_json

logger = logging.getLogger(__name__)


DEFAULT_IMAGE_FILE_TYPES = ("jpeg", "jpg", "gif", "bmp", "png", "tiff", "tif")


# ------------------------------------------------------------------
# Schema
# ------------------------------------------------------------------

_AUTOFILL_NODE_SCHEMA = {
    "type": "object",
    "required": ["alias"],
    "properties": {
        "alias": {"type": "string", "minLength": 1},
        "widthFieldAlias": {"type": "string"},
        "heightFieldAlias": {"type": "string"},
        "lengthFieldAlias": {"type": "string"},
        "extensionFieldAlias": {"type": "string"},
    },
    "additionalProperties": False,
}

SETTINGS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "content": {
            "type": "object",
            "properties": {
                "imaging": {
                    "type": "object",
                    "properties": {
                        "imageFileTypes": {
                            "type": "array",
                            "items": {"type": "string"},
                        },
                        "autoFillImageProperties": {
                            "type": "array",
                            "items": _AUTOFILL_NODE_SCHEMA,
                        },
                    },
                },
            },
        },
        "imageCropper": {
            "type": "object",
            "properties": {
                "persistLegacyRewrite": {"type": "boolean"},
            },
        },
        "media": {
            "type": "object",
            "properties": {
                "root": {"type": ["string", "null"]},
                "urlPrefix": {"type": "string"},
            },
        },
    },
}


# ------------------------------------------------------------------
# Models
# ------------------------------------------------------------------

class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ImageAutoFillProperty(_SettingsModel):
    """Maps an upload property alias to the fields derived from its file.

    Any of the field aliases may be empty, in which case that piece of
    metadata is not written.
    """

    alias: str
    width_field_alias: str = "umbracoWidth"
    height_field_alias: str = "umbracoHeight"
    length_field_alias: str = "umbracoBytes"
    extension_field_alias: str = "umbracoExtension"

    def field_aliases(self) -> list[str]:
        """Return the non-empty derived field aliases."""
        return [
            a for a in (
                self.width_field_alias,
                self.height_field_alias,
                self.length_field_alias,
                self.extension_field_alias,
            )
            if a
        ]


class ImagingSettings(_SettingsModel):
    image_file_types: tuple[str, ...] = DEFAULT_IMAGE_FILE_TYPES
    auto_fill_image_properties: tuple[ImageAutoFillProperty, ...] = (
        ImageAutoFillProperty(alias="umbracoFile"),
    )

    def get_autofill_node(self, alias: str) -> ImageAutoFillProperty | None:
        """Return the first auto-fill node configured for *alias*, if any."""
        for node in self.auto_fill_image_properties:
            if node.alias == alias:
                return node
        return None

    def is_image_file_type(self, extension: str) -> bool:
        ext = extension.lower().lstrip(".")
        return ext in {t.lower() for t in self.image_file_types}


class ContentSettings(_SettingsModel):
    imaging: ImagingSettings = Field(default_factory=ImagingSettings)


class ImageCropperSettings(_SettingsModel):
    # Write the normalized {src, crops} payload back onto legacy string values.
    persist_legacy_rewrite: bool = True


class MediaSettings(_SettingsModel):
    root: Optional[str] = None
    url_prefix: str = "/media/"

    def resolved_root(self) -> str:
        """Return the configured media root, or the platform default."""
        return self.root or get_media_root()


class CmsSettings(_SettingsModel):
    content: ContentSettings = Field(default_factory=ContentSettings)
    image_cropper: ImageCropperSettings = Field(default_factory=ImageCropperSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)


# ------------------------------------------------------------------
# Loading
# ------------------------------------------------------------------

def parse_settings(data: dict[str, Any]) -> CmsSettings:
    """Validate a settings document and build a ``CmsSettings``.

    Raises
    ------
    ConfigurationError
        If the document does not match ``SETTINGS_SCHEMA``.
    """
    try:
        jsonschema.validate(instance=data, schema=SETTINGS_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise ConfigurationError(_humanize_schema_error(exc)) from exc
    return CmsSettings.model_validate(data)


def load_settings(path: str | None = None) -> CmsSettings:
    """Load settings from *path* (or the platform default location).

    A missing file yields the defaults.  An unreadable or invalid file
    raises ``ConfigurationError``.
    """
    path = path or get_settings_path()
    if not os.path.exists(path):
        logger.info("No settings file at %s, using defaults", path)
        return CmsSettings()

    data = safe_read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"The settings file '{path}' could not be read as a JSON object."
        )
    settings = parse_settings(data)
    logger.info(
        "Loaded settings from %s (%d auto-fill properties)",
        path,
        len(settings.content.imaging.auto_fill_image_properties),
    )
    return settings


def _humanize_schema_error(exc: jsonschema.ValidationError) -> str:
    """Turn a jsonschema error into a one-line message naming the field."""
    field_path = " -> ".join(str(part) for part in exc.absolute_path)
    if not field_path:
        field_path = "(root)"
    return f"Settings field '{field_path}' is invalid: {exc.message}."
