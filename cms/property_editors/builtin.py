"""
cms/property_editors/builtin.py -- Stock property editors.

Plain editors with no behaviour of their own beyond their metadata.  The
image cropper lives in ``image_cropper.py``.
"""

from __future__ import annotations

from cms.property_editors.base import (
    PreValueEditor,
    PreValueField,
    PropertyEditor,
    property_editor,
)

TEXTBOX_ALIAS = "Umbraco.Textbox"
TEXTAREA_ALIAS = "Umbraco.TextboxMultiple"
RICH_TEXT_ALIAS = "Umbraco.TinyMCEv3"
UPLOAD_FIELD_ALIAS = "Umbraco.UploadField"
NO_EDIT_ALIAS = "Umbraco.NoEdit"
INTEGER_ALIAS = "Umbraco.Integer"


@property_editor(TEXTBOX_ALIAS, "Textbox", "textbox")
class TextboxPropertyEditor(PropertyEditor):
    pass


@property_editor(TEXTAREA_ALIAS, "Textarea", "textarea", value_type="TEXT")
class TextareaPropertyEditor(PropertyEditor):
    pass


class _RichTextPreValueEditor(PreValueEditor):
    fields = (
        PreValueField("editor", "Rich text editor", "rte"),
        PreValueField("hideLabel", "Hide label", "boolean"),
    )


@property_editor(RICH_TEXT_ALIAS, "Rich Text Editor", "rte", value_type="TEXT")
class RichTextPropertyEditor(PropertyEditor):
    def create_prevalue_editor(self) -> PreValueEditor:
        return _RichTextPreValueEditor()


@property_editor(UPLOAD_FIELD_ALIAS, "File upload", "fileupload")
class FileUploadPropertyEditor(PropertyEditor):
    pass


@property_editor(NO_EDIT_ALIAS, "Label", "readonlyvalue")
class LabelPropertyEditor(PropertyEditor):
    pass


@property_editor(INTEGER_ALIAS, "Numeric", "integer", value_type="INT")
class IntegerPropertyEditor(PropertyEditor):
    pass


BUILTIN_EDITORS = (
    TextboxPropertyEditor,
    TextareaPropertyEditor,
    RichTextPropertyEditor,
    FileUploadPropertyEditor,
    LabelPropertyEditor,
    IntegerPropertyEditor,
)
