"""
cms/property_editors/base.py -- Property editor plugins and their registry.

A property editor is a plugin class decorated with ``@property_editor``,
which attaches its alias, display name, view and value type.  The
``PropertyEditorRegistry`` is built once at startup from a list of such
classes and answers exact-alias lookups; a missing alias returns ``None``.

Usage::

    @property_editor("My.Editor", "My editor", "myeditor", value_type="JSON")
    class MyEditor(PropertyEditor):
        pass

    registry = PropertyEditorRegistry([MyEditor])
    editor = registry.get("My.Editor")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from cms.models.editing import EditorReference

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Pre-value (data type configuration) editors
# ------------------------------------------------------------------

@dataclass(frozen=True)
class PreValueField:
    """One configurable setting of a data type."""

    key: str
    name: str
    view: str
    description: str = ""


class PreValueEditor:
    """Describes the settings a data type of this editor can carry.

    Subclasses list their settings in ``fields``.
    """

    fields: tuple[PreValueField, ...] = ()

    def field_keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def get_field(self, key: str) -> PreValueField | None:
        for f in self.fields:
            if f.key == key:
                return f
        return None


# ------------------------------------------------------------------
# Property editors
# ------------------------------------------------------------------

class PropertyEditor:
    """Base class for property editor plugins.

    The class attributes below are set by the ``@property_editor``
    decorator.
    """

    alias: str = ""
    name: str = ""
    view: str = ""
    value_type: str = "STRING"
    hide_label: bool = False

    def __init__(self):
        self._default_prevalues: dict[str, Any] = {}

    @property
    def default_prevalues(self) -> dict[str, Any]:
        return self._default_prevalues

    @default_prevalues.setter
    def default_prevalues(self, value: dict[str, Any]) -> None:
        self._default_prevalues = dict(value)

    def create_prevalue_editor(self) -> PreValueEditor:
        return PreValueEditor()

    def to_reference(self) -> EditorReference:
        return EditorReference(
            alias=self.alias,
            name=self.name,
            view=self.view,
            value_type=self.value_type,
            hide_label=self.hide_label,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} alias={self.alias!r}>"


def property_editor(
    alias: str,
    name: str,
    view: str,
    *,
    value_type: str = "STRING",
    hide_label: bool = False,
):
    """Class decorator declaring a property editor's plugin metadata."""
    if not alias:
        raise ValueError("A property editor needs a non-empty alias.")

    def decorate(cls: type[PropertyEditor]) -> type[PropertyEditor]:
        cls.alias = alias
        cls.name = name
        cls.view = view
        cls.value_type = value_type
        cls.hide_label = hide_label
        return cls

    return decorate


# ------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------

class PropertyEditorRegistry:
    """Exact-alias lookup of property editor instances.

    Parameters
    ----------
    editor_types : iterable of PropertyEditor subclasses
        Editor classes carrying ``@property_editor`` metadata.  Each class
        is instantiated once.
    """

    def __init__(self, editor_types: Iterable[type[PropertyEditor]]):
        self._editors: dict[str, PropertyEditor] = {}
        for editor_type in editor_types:
            if not editor_type.alias:
                raise ValueError(
                    f"{editor_type.__name__} has no alias; decorate it "
                    f"with @property_editor."
                )
            if editor_type.alias in self._editors:
                raise ValueError(
                    f"Duplicate property editor alias '{editor_type.alias}' "
                    f"({editor_type.__name__})."
                )
            self._editors[editor_type.alias] = editor_type()
        logger.debug("Registered %d property editors", len(self._editors))

    def get(self, alias: str) -> PropertyEditor | None:
        return self._editors.get(alias)

    def aliases(self) -> list[str]:
        return sorted(self._editors)

    def __contains__(self, alias: object) -> bool:
        return alias in self._editors

    def __len__(self) -> int:
        return len(self._editors)
