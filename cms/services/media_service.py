"""
cms/services/media_service.py -- In-process media store with lifecycle hooks.

The store keeps media items in memory and runs two explicit hook lists:

    saving hooks   called with a ``SaveEventArgs`` before a save commits;
                   a hook may cancel the save by setting ``args.cancel``.
    created hooks  called with a ``NewEventArgs`` once a new item exists.

Hooks are handed to the service (constructor or ``register_*``); there is
no process-wide subscriber list.  A hook raising ``SoftHookError`` does not
abort the save: the error is logged and reported on the ``SaveResult``,
one warning per failure when a hook raises ``SoftHookErrors``.

Usage::

    service = MediaService([image_type], saving_hooks=[enricher.on_media_saving])
    media = service.create_media("Photo", -1, "Image")
    media.set_value("umbracoFile", "/media/1001/photo.jpg")
    result = service.save(media)
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence, Union

from cms.errors import SoftHookError, SoftHookErrors, UnknownMediaTypeError
from cms.models.base import Media, MediaType

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Event arguments
# ------------------------------------------------------------------

@dataclass
class SaveEventArgs:
    """Arguments of a pending save.  Set ``cancel`` to stop it."""

    saved_entities: list[Media]
    user_id: int = 0
    cancel: bool = False


@dataclass
class NewEventArgs:
    """Arguments of a newly created media item."""

    entity: Media
    parent_id: int
    media_type_alias: str
    user_id: int = 0


SavingHook = Callable[[SaveEventArgs], None]
CreatedHook = Callable[[NewEventArgs], None]


@dataclass
class SaveResult:
    """Outcome of ``MediaService.save``.

    ``warnings`` holds the messages of soft hook failures; the items were
    still saved when ``success`` is true.
    """

    success: bool
    cancelled: bool = False
    entities: list[Media] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ------------------------------------------------------------------
# MediaService
# ------------------------------------------------------------------

class MediaService:
    """Creates and saves media items, running the registered hooks.

    Parameters
    ----------
    media_types : iterable of MediaType
        Media types items may be created from, looked up by alias.
    saving_hooks, created_hooks : sequences of callables
        Hooks run in registration order.
    """

    def __init__(
        self,
        media_types: Iterable[MediaType] = (),
        saving_hooks: Sequence[SavingHook] = (),
        created_hooks: Sequence[CreatedHook] = (),
    ):
        self._lock = threading.RLock()
        self._media_types: dict[str, MediaType] = {mt.alias: mt for mt in media_types}
        self._items: dict[int, Media] = {}
        self._media_ids = itertools.count(1000)
        self._property_ids = itertools.count(1)
        self._saving_hooks: list[SavingHook] = list(saving_hooks)
        self._created_hooks: list[CreatedHook] = list(created_hooks)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_saving_hook(self, hook: SavingHook) -> None:
        self._saving_hooks.append(hook)

    def register_created_hook(self, hook: CreatedHook) -> None:
        self._created_hooks.append(hook)

    def register_media_type(self, media_type: MediaType) -> None:
        with self._lock:
            self._media_types[media_type.alias] = media_type

    def get_media_type(self, alias: str) -> MediaType | None:
        with self._lock:
            return self._media_types.get(alias)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_media(
        self,
        name: str,
        parent_id: int,
        media_type_alias: str,
        user_id: int = 0,
    ) -> Media:
        """Create an unsaved media item and run the created hooks.

        Raises
        ------
        UnknownMediaTypeError
            If no media type with *media_type_alias* is registered.
        """
        media = self._new_media(name, parent_id, media_type_alias, user_id)
        self._run_created_hooks(NewEventArgs(media, parent_id, media_type_alias, user_id))
        return media

    def create_media_with_identity(
        self,
        name: str,
        parent_id: int,
        media_type_alias: str,
        user_id: int = 0,
    ) -> Media:
        """Create a media item, save it, then run the created hooks.

        If a saving hook cancels the save the item is returned without an
        id and the created hooks are not run.
        """
        media = self._new_media(name, parent_id, media_type_alias, user_id)
        result = self.save(media, user_id=user_id)
        if result.success:
            self._run_created_hooks(NewEventArgs(media, parent_id, media_type_alias, user_id))
        return media

    def _new_media(self, name: str, parent_id: int, media_type_alias: str, user_id: int) -> Media:
        media_type = self.get_media_type(media_type_alias)
        if media_type is None:
            raise UnknownMediaTypeError(
                f"No media type with alias '{media_type_alias}' is registered."
            )
        return Media.from_type(media_type, name, parent_id=parent_id, creator_id=user_id)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self, media: Union[Media, Iterable[Media]], user_id: int = 0) -> SaveResult:
        """Save one media item or a batch.

        Runs the saving hooks first.  A cancelled save persists nothing.
        Soft hook failures are collected as warnings and the save goes on.
        """
        batch = [media] if isinstance(media, Media) else list(media)
        args = SaveEventArgs(saved_entities=batch, user_id=user_id)
        warnings: list[str] = []

        for hook in self._saving_hooks:
            try:
                hook(args)
            except SoftHookError as exc:
                logger.warning("Saving hook %r failed softly: %s", hook, exc, exc_info=True)
                warnings.extend(_failure_messages(exc))
            if args.cancel:
                logger.info("Save of %d media item(s) cancelled by %r", len(batch), hook)
                return SaveResult(success=False, cancelled=True, warnings=warnings)

        now = datetime.now(timezone.utc)
        with self._lock:
            for item in batch:
                if item.id == 0:
                    item.id = next(self._media_ids)
                    item.create_date = now
                for prop in item.properties:
                    if prop.id == 0:
                        prop.id = next(self._property_ids)
                item.update_date = now
                self._items[item.id] = item

        logger.debug("Saved %d media item(s)", len(batch))
        return SaveResult(success=True, entities=batch, warnings=warnings)

    def _run_created_hooks(self, args: NewEventArgs) -> None:
        for hook in self._created_hooks:
            try:
                hook(args)
            except SoftHookError as exc:
                logger.warning("Created hook %r failed softly: %s", hook, exc, exc_info=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, media_id: int) -> Media | None:
        with self._lock:
            return self._items.get(media_id)

    def get_children(self, parent_id: int) -> list[Media]:
        with self._lock:
            return [m for m in self._items.values() if m.parent_id == parent_id]

    def count(self) -> int:
        with self._lock:
            return len(self._items)


def _failure_messages(exc: SoftHookError) -> list[str]:
    if isinstance(exc, SoftHookErrors):
        return [str(e) for e in exc.errors]
    return [str(exc)]
