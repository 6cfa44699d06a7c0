"""
cms/property_editors/image_cropper.py -- Image cropper editor and media auto-fill.

``ImageCropperPropertyEditor`` stores an upload as ``{"src": ..., "crops": [...]}``.
``AssetMetadataEnricher`` is the save/create hook that keeps the file
metadata fields of a media item (width, height, bytes, extension) in step
with its upload property:

    structured value with ``src``  -> populate metadata from ``src``
    bare string (legacy format)    -> normalize to {src, crops}, populate
    no value                       -> reset metadata
    any other non-string value     -> left alone

The hook is wired to the media service by the application::

    enricher = AssetMetadataEnricher(settings, data_types, populator)
    media_service.register_saving_hook(enricher.on_media_saving)
    media_service.register_created_hook(enricher.on_media_created)
"""

from __future__ import annotations

import logging
from typing import Any

from cms.config import CmsSettings
from cms.errors import SoftHookError, SoftHookErrors
from cms.models.base import ContentBase, Property
from cms.models.values import Absent, Opaque, Scalar, Structured, read_stored_value
from cms.property_editors.base import (
    PreValueEditor,
    PreValueField,
    PropertyEditor,
    property_editor,
)
from cms.services.data_type_service import DataTypeService
from cms.services.file_metadata import FileMetadataPopulator
from cms.services.media_service import NewEventArgs, SaveEventArgs
from cms.utils import parse_json_list

logger = logging.getLogger(__name__)

IMAGE_CROPPER_ALIAS = "Umbraco.ImageCropper"


# ------------------------------------------------------------------
# Editor
# ------------------------------------------------------------------

class ImageCropperPreValueEditor(PreValueEditor):
    fields = (PreValueField("crops", "Crop sizes", "cropsizes"),)


@property_editor(
    IMAGE_CROPPER_ALIAS, "Image Cropper", "imagecropper",
    value_type="JSON", hide_label=False,
)
class ImageCropperPropertyEditor(PropertyEditor):
    def __init__(self):
        super().__init__()
        self.default_prevalues = {
            "focalPoint": "{left: 0.5, top: 0.5}",
            "src": "",
        }

    def create_prevalue_editor(self) -> PreValueEditor:
        return ImageCropperPreValueEditor()


# ------------------------------------------------------------------
# Auto-fill hook
# ------------------------------------------------------------------

class AssetMetadataEnricher:
    """Populates or resets file metadata on media items as they are saved.

    Parameters
    ----------
    settings : CmsSettings
        Supplies the auto-fill nodes and whether legacy string values are
        rewritten in place.
    data_type_service : DataTypeService
        Source of the crop presets (first pre-value of the data type).
    file_metadata : FileMetadataPopulator
        Performs the actual populate / reset.

    Lookup misses degrade to defaults and are logged.  A ``FileMetadataError``
    raised while populating propagates to the hook caller.
    """

    def __init__(
        self,
        settings: CmsSettings,
        data_type_service: DataTypeService,
        file_metadata: FileMetadataPopulator,
    ):
        self._imaging = settings.content.imaging
        self._persist_rewrite = settings.image_cropper.persist_legacy_rewrite
        self._data_types = data_type_service
        self._file_metadata = file_metadata

    def on_media_saving(self, args: SaveEventArgs) -> None:
        """Auto-fill every saved item, each one independently.

        Raises
        ------
        SoftHookError
            After the whole batch was handled, if any item failed: the
            single failure, or ``SoftHookErrors`` holding all of them.
        """
        failures: list[SoftHookError] = []
        for media in args.saved_entities:
            try:
                self.auto_fill(media)
            except SoftHookError as exc:
                logger.warning("Auto-fill of '%s' failed: %s", media.name, exc)
                failures.append(exc)
        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise SoftHookErrors(failures)

    def on_media_created(self, args: NewEventArgs) -> None:
        self.auto_fill(args.entity)

    def auto_fill(self, entity: ContentBase) -> None:
        for prop in entity.properties:
            node = self._imaging.get_autofill_node(prop.alias)
            if node is None:
                continue

            stored = read_stored_value(prop.value)
            if isinstance(stored, Structured):
                if not stored.has_src:
                    logger.debug("'%s' on '%s' has no src; leaving it alone", prop.alias, entity.name)
                    continue
                self._file_metadata.populate(node, stored.src, entity)
            elif isinstance(stored, Scalar):
                if self._persist_rewrite:
                    prop.value = {"src": stored.text, "crops": self.get_crop_presets(prop)}
                self._file_metadata.populate(node, stored.text, entity)
            elif isinstance(stored, Absent):
                self._file_metadata.reset(node, entity)
            elif isinstance(stored, Opaque):
                logger.debug(
                    "'%s' on '%s' holds a %s, not an upload; leaving it alone",
                    prop.alias, entity.name, type(stored.value).__name__,
                )

    def get_crop_presets(self, prop: Property) -> list[Any]:
        """Return the crop presets configured on *prop*'s data type.

        Falls back to an empty list when none are configured or the stored
        presets are not a JSON array.
        """
        data_type_id = prop.property_type.data_type_definition_id
        prevalues = self._data_types.get_prevalues_by_data_type_id(data_type_id)
        if not prevalues or not prevalues[0]:
            logger.debug("No crop presets configured for data type %s", data_type_id)
            return []
        crops = parse_json_list(prevalues[0])
        if crops is None:
            logger.warning(
                "Crop presets of data type %s are not a JSON array; using none",
                data_type_id,
            )
            return []
        return crops
