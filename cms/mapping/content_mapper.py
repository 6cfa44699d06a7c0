"""
cms/mapping/content_mapper.py -- Projection of content and media items.

Builds the view models the back office works with:

    project_basic    identity + (alias, id, value) for every property
    project_dto      identity + fully resolved properties, flat
    project_display  identity + fully resolved properties grouped into tabs

Projection only reads the entity.  Running it twice on an unchanged entity
gives equal results.

In the default lenient mode a property whose data type or editor does not
resolve is still emitted (without them) and the failure is recorded on the
result's ``errors``; ``strict=True`` raises the ``ProjectionError`` instead.

Usage::

    mapper = ContentModelMapper(editors, data_types, UserModelMapper(users))
    display = mapper.project_display(content)
    display.tabs[0].is_active      # True
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from cms.errors import ProjectionError
from cms.mapping.property_mapper import PropertyMapper
from cms.mapping.tab_mapper import TabMapper
from cms.models.base import ContentBase, Property
from cms.models.editing import (
    ContentItemBasic,
    ContentItemDisplay,
    ContentItemDto,
    ContentPropertyDto,
    UserBasic,
)
from cms.property_editors.base import PropertyEditorRegistry
from cms.services.data_type_service import DataTypeService
from cms.services.user_service import UserService

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown user"


class UserModelMapper:
    """Resolves an owner id to a ``UserBasic``.

    A user that cannot be found becomes a placeholder carrying the id.
    """

    def __init__(self, users: UserService):
        self._users = users

    def to_user_basic(self, user_id: int) -> UserBasic:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            logger.debug("Owner %s not found; using placeholder", user_id)
            return UserBasic(user_id=user_id, name=UNKNOWN_USER_NAME)
        return UserBasic(user_id=user.id, name=user.name)


class ContentModelMapper:
    """Projects content and media items into view models.

    Parameters
    ----------
    editors : PropertyEditorRegistry
    data_types : DataTypeService
    user_mapper : UserModelMapper
    tab_mapper : TabMapper, optional
    """

    def __init__(
        self,
        editors: PropertyEditorRegistry,
        data_types: DataTypeService,
        user_mapper: UserModelMapper,
        tab_mapper: TabMapper | None = None,
    ):
        self.properties = PropertyMapper(editors, data_types)
        self.tabs = tab_mapper or TabMapper()
        self._users = user_mapper

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def project_basic(self, entity: ContentBase) -> ContentItemBasic:
        return ContentItemBasic(
            **self._identity(entity),
            properties=[self.properties.to_basic(p) for p in entity.properties],
        )

    def project_dto(self, entity: ContentBase, strict: bool = False) -> ContentItemDto:
        errors: dict[str, str] = {}
        project = self._projector(errors, strict)
        return ContentItemDto(
            **self._identity(entity),
            properties=[project(p) for p in entity.properties],
            errors=errors,
        )

    def project_display(self, entity: ContentBase, strict: bool = False) -> ContentItemDisplay:
        """Project *entity* into tabs.

        Raises
        ------
        ProjectionError
            Only with ``strict=True``, for the first property whose data
            type or editor does not resolve.
        """
        errors: dict[str, str] = {}
        tabs = self.tabs.map_tabs(
            entity.property_groups,
            entity.properties,
            self._projector(errors, strict),
        )
        if errors:
            logger.warning(
                "'%s' projected with %d unresolved properties: %s",
                entity.name, len(errors), ", ".join(sorted(errors)),
            )
        return ContentItemDisplay(**self._identity(entity), tabs=tabs, errors=errors)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _identity(self, entity: ContentBase) -> dict[str, Any]:
        return {
            "id": entity.id,
            "key": str(entity.key),
            "parent_id": entity.parent_id,
            "name": entity.name,
            "content_type_alias": entity.content_type_alias,
            "create_date": entity.create_date,
            "update_date": entity.update_date,
            "owner": self._users.to_user_basic(entity.creator_id),
        }

    def _projector(
        self,
        errors: dict[str, str],
        strict: bool,
    ) -> Callable[[Property], ContentPropertyDto]:
        def project(prop: Property) -> ContentPropertyDto:
            try:
                return self.properties.to_display(prop)
            except ProjectionError as exc:
                if strict:
                    raise
                errors[exc.alias] = str(exc)
                return self.properties.to_unresolved(prop)

        return project
