"""
cms/mapping/property_mapper.py -- Projection of single properties.

``to_basic`` copies alias, id and value and never consults a registry.
``to_display`` also resolves the data type (by id) and the property editor
(by the data type's editor alias); either lookup missing raises a
``ProjectionError`` naming the property.
"""

from __future__ import annotations

import copy

from cms.errors import MissingDataTypeError, MissingEditorError
from cms.models.base import Property
from cms.models.editing import ContentPropertyBasic, ContentPropertyDto
from cms.property_editors.base import PropertyEditorRegistry
from cms.services.data_type_service import DataTypeService


class PropertyMapper:
    """Maps ``Property`` instances to view-model property records.

    Parameters
    ----------
    editors : PropertyEditorRegistry
        Registered property editors, looked up by alias.
    data_types : DataTypeService
        Data type definitions, looked up by id.
    """

    def __init__(self, editors: PropertyEditorRegistry, data_types: DataTypeService):
        self._editors = editors
        self._data_types = data_types

    def to_basic(self, prop: Property) -> ContentPropertyBasic:
        return ContentPropertyBasic(
            id=prop.id,
            alias=prop.alias,
            value=copy.deepcopy(prop.value),
        )

    def to_display(self, prop: Property) -> ContentPropertyDto:
        """Build the fully resolved record for *prop*.

        Raises
        ------
        MissingDataTypeError
            The property type's data type id does not resolve.
        MissingEditorError
            The data type's editor alias is not registered.
        """
        property_type = prop.property_type
        data_type = self._data_types.get_data_type_definition_by_id(
            property_type.data_type_definition_id
        )
        if data_type is None:
            raise MissingDataTypeError(prop.alias, property_type.data_type_definition_id)

        editor = self._editors.get(data_type.property_editor_alias)
        if editor is None:
            raise MissingEditorError(prop.alias, data_type.property_editor_alias)

        record = self.to_unresolved(prop)
        record.data_type = data_type.model_copy()
        record.editor = editor.to_reference()
        return record

    def to_unresolved(self, prop: Property) -> ContentPropertyDto:
        """Build the display record without data type or editor."""
        property_type = prop.property_type
        return ContentPropertyDto(
            id=prop.id,
            alias=prop.alias,
            value=copy.deepcopy(prop.value),
            is_required=property_type.mandatory,
            validation_regexp=property_type.validation_regexp,
            description=property_type.description,
            label=property_type.name,
        )
