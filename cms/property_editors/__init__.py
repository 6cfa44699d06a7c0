"""
cms/property_editors/ -- Property editor plugins.

Submodules:
    base           Editor base class, ``@property_editor`` metadata, registry.
    builtin        Stock editors (textbox, textarea, rich text, upload, ...).
    image_cropper  Image cropper editor and the media auto-fill hook.
"""

from cms.property_editors.base import (
    PreValueEditor,
    PreValueField,
    PropertyEditor,
    PropertyEditorRegistry,
    property_editor,
)

__all__ = [
    "PreValueEditor",
    "PreValueField",
    "PropertyEditor",
    "PropertyEditorRegistry",
    "property_editor",
]
