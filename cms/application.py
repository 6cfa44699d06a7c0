"""
cms/application.py -- Composition root for the content engine.

Builds every collaborator once and wires them together explicitly: the
editor registry, the data type and user lookups, the file metadata
populator, the media service with the image cropper's auto-fill hooks, and
the content mapper.  Nothing is stored in module-level state; create as
many applications as needed (tests create one per case).

Usage::

    from cms.application import CmsApplication, setup_logging

    setup_logging()
    app = CmsApplication(data_types=[...], users=[...], media_types=[...])
    display = app.project_display(content)
    app.media_service.save(media)
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from cms.config import CmsSettings, load_settings
from cms.mapping.content_mapper import ContentModelMapper, UserModelMapper
from cms.models.base import ContentBase, DataTypeDefinition, MediaType, User
from cms.models.editing import ContentItemBasic, ContentItemDisplay, ContentItemDto
from cms.models.validators import validate_content
from cms.property_editors.base import PropertyEditor, PropertyEditorRegistry
from cms.property_editors.builtin import BUILTIN_EDITORS
from cms.property_editors.image_cropper import AssetMetadataEnricher, ImageCropperPropertyEditor
from cms.services.data_type_service import DataTypeService
from cms.services.file_metadata import FileMetadataPopulator
from cms.services.media_service import MediaService
from cms.services.user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_EDITORS: tuple[type[PropertyEditor], ...] = BUILTIN_EDITORS + (ImageCropperPropertyEditor,)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for a process hosting the content engine."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


class CmsApplication:
    """Owns and wires the content engine's services.

    Parameters
    ----------
    settings : CmsSettings, optional
        Loaded from the default settings location when omitted.
    data_types : iterable of DataTypeDefinition
    prevalues : mapping of data type id -> pre-value strings
    users : iterable of User
    media_types : iterable of MediaType
    editor_types : iterable of PropertyEditor subclasses, optional
        Defaults to the stock editors plus the image cropper.
    media_root : str, optional
        Overrides ``settings.media.root``.
    """

    def __init__(
        self,
        settings: CmsSettings | None = None,
        *,
        data_types: Iterable[DataTypeDefinition] = (),
        prevalues: Mapping[int, Iterable[str]] | None = None,
        users: Iterable[User] = (),
        media_types: Iterable[MediaType] = (),
        editor_types: Iterable[type[PropertyEditor]] | None = None,
        media_root: str | None = None,
    ):
        self.settings = settings if settings is not None else load_settings()

        self.editors = PropertyEditorRegistry(
            editor_types if editor_types is not None else DEFAULT_EDITORS
        )
        self.data_types = DataTypeService(data_types, prevalues)
        self.users = UserService(users)

        self.file_metadata = FileMetadataPopulator(
            media_root or self.settings.media.resolved_root(),
            self.settings.content.imaging,
            url_prefix=self.settings.media.url_prefix,
        )
        self.enricher = AssetMetadataEnricher(self.settings, self.data_types, self.file_metadata)
        self.media_service = MediaService(
            media_types,
            saving_hooks=[self.enricher.on_media_saving],
            created_hooks=[self.enricher.on_media_created],
        )

        self.mapper = ContentModelMapper(self.editors, self.data_types, UserModelMapper(self.users))
        logger.info(
            "Content engine ready: %d editors, %d data types, media root %s",
            len(self.editors),
            len(self.data_types.get_all_data_type_definitions()),
            self.file_metadata.media_root,
        )

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project_basic(self, entity: ContentBase) -> ContentItemBasic:
        return self.mapper.project_basic(entity)

    def project_dto(self, entity: ContentBase, strict: bool = False) -> ContentItemDto:
        return self.mapper.project_dto(entity, strict=strict)

    def project_display(self, entity: ContentBase, strict: bool = False) -> ContentItemDisplay:
        return self.mapper.project_display(entity, strict=strict)

    def validate_content(self, entity: ContentBase) -> list[str]:
        return validate_content(entity)
