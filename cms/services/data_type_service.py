"""
cms/services/data_type_service.py -- Data type definitions and pre-values.

A data type is a configured instance of a property editor.  Its pre-values
are the configuration strings set on it (for the image cropper, the first
pre-value holds the crop presets as JSON text).
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Mapping

from cms.models.base import DataTypeDefinition

logger = logging.getLogger(__name__)


class DataTypeService:
    """Lookup of data type definitions and pre-values by data type id.

    Lookups never raise: a missing definition is ``None`` and missing
    pre-values are an empty list.
    """

    def __init__(
        self,
        definitions: Iterable[DataTypeDefinition] = (),
        prevalues: Mapping[int, Iterable[str]] | None = None,
    ):
        self._lock = threading.RLock()
        self._definitions: dict[int, DataTypeDefinition] = {d.id: d for d in definitions}
        self._prevalues: dict[int, list[str]] = {
            dt_id: list(values) for dt_id, values in (prevalues or {}).items()
        }

    def get_data_type_definition_by_id(self, data_type_id: int) -> DataTypeDefinition | None:
        with self._lock:
            return self._definitions.get(data_type_id)

    def get_all_data_type_definitions(self) -> list[DataTypeDefinition]:
        with self._lock:
            return list(self._definitions.values())

    def get_prevalues_by_data_type_id(self, data_type_id: int) -> list[str]:
        with self._lock:
            return list(self._prevalues.get(data_type_id, []))

    def save_data_type_definition(self, definition: DataTypeDefinition) -> None:
        with self._lock:
            self._definitions[definition.id] = definition
        logger.debug("Saved data type %s (%s)", definition.id, definition.property_editor_alias)

    def save_prevalues(self, data_type_id: int, values: Iterable[str]) -> None:
        with self._lock:
            self._prevalues[data_type_id] = list(values)
