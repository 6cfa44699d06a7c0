"""
cms/services/file_metadata.py -- Derived metadata for uploaded files.

Given an auto-fill configuration node and a file reference (the ``src`` of
an upload, e.g. ``/media/1001/photo.jpg``), fills the node's derived fields
on the entity:

    width / height   pixel size, for configured image file types (Pillow)
    length           file size in bytes
    extension        lower-case file extension

Only fields whose alias exists on the entity are written.  ``reset`` clears
the same fields.

Usage::

    populator = FileMetadataPopulator("/srv/media", settings.content.imaging)
    populator.populate(node, "/media/1001/photo.jpg", media)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Any

from PIL import Image, UnidentifiedImageError

from cms.config import ImageAutoFillProperty, ImagingSettings
from cms.errors import FileMetadataError
from cms.models.base import ContentBase

logger = logging.getLogger(__name__)


class FileMetadataPopulator:
    """Reads uploaded files below *media_root* and writes their metadata.

    Parameters
    ----------
    media_root : str or pathlib.Path
        Directory that file references are resolved against.
    imaging : ImagingSettings
        Decides which extensions are images (and so get width/height).
    url_prefix : str
        Public URL prefix stripped from references before resolving,
        ``"/media/"`` by default.
    """

    def __init__(
        self,
        media_root,
        imaging: ImagingSettings | None = None,
        url_prefix: str = "/media/",
    ):
        self.media_root = Path(media_root).resolve()
        self._imaging = imaging or ImagingSettings()
        self._url_prefix = url_prefix

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve_path(self, reference: str) -> Path | None:
        """Map a file reference to a path below the media root.

        Returns ``None`` for references that would escape the root.
        """
        ref = reference.strip().replace("\\", "/")
        prefix = self._url_prefix.strip("/")
        ref = ref.lstrip("/")
        if prefix and ref.startswith(prefix + "/"):
            ref = ref[len(prefix) + 1:]

        candidate = (self.media_root / PurePosixPath(ref)).resolve()
        try:
            candidate.relative_to(self.media_root)
        except ValueError:
            logger.warning("File reference '%s' points outside the media root", reference)
            return None
        return candidate

    # ------------------------------------------------------------------
    # Populate / reset
    # ------------------------------------------------------------------

    def populate(self, node: ImageAutoFillProperty, reference: str, entity: ContentBase) -> None:
        """Write the file metadata for *reference* onto *entity*.

        An empty reference or a file that does not exist resets the fields.

        Raises
        ------
        FileMetadataError
            If the file exists but cannot be read.
        """
        if not reference:
            self.reset(node, entity)
            return

        path = self.resolve_path(reference)
        if path is None or not path.is_file():
            logger.warning(
                "Upload '%s' on '%s' not found under %s; clearing %s",
                reference, entity.name, self.media_root, node.alias,
            )
            self.reset(node, entity)
            return

        extension = path.suffix.lstrip(".").lower()
        try:
            length = os.path.getsize(path)
            width, height = self._read_dimensions(path, extension)
        except OSError as exc:
            raise FileMetadataError(
                reference, f"Could not read '{reference}' for its metadata: {exc}"
            ) from exc

        _set_if_present(entity, node.width_field_alias, width)
        _set_if_present(entity, node.height_field_alias, height)
        _set_if_present(entity, node.length_field_alias, length)
        _set_if_present(entity, node.extension_field_alias, extension)
        logger.debug(
            "Populated %s on '%s': %sx%s, %d bytes, .%s",
            node.alias, entity.name, width, height, length, extension,
        )

    def reset(self, node: ImageAutoFillProperty, entity: ContentBase) -> None:
        """Clear every derived field of *node* present on *entity*."""
        for alias in node.field_aliases():
            _set_if_present(entity, alias, None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_dimensions(self, path: Path, extension: str) -> tuple[int | None, int | None]:
        if not self._imaging.is_image_file_type(extension):
            return None, None
        try:
            with Image.open(path) as img:
                width, height = img.size
        except UnidentifiedImageError:
            logger.warning("'%s' has an image extension but is not a readable image", path)
            return None, None
        return width, height


def _set_if_present(entity: ContentBase, alias: str, value: Any) -> None:
    if alias and entity.has_property(alias):
        entity.set_value(alias, value)
