"""
cms/errors.py -- Exception taxonomy for the content engine.

Lookups return ``None`` or empty values when something is absent; these
exceptions cover the cases that a caller has to decide about.
"""

from __future__ import annotations


class CmsError(Exception):
    """Base class for every error raised by the content engine."""


class ConfigurationError(CmsError):
    """The settings document is malformed."""


class ProjectionError(CmsError):
    """A property could not be projected into its display record.

    Attributes
    ----------
    alias : str
        Alias of the offending property.
    """

    def __init__(self, alias: str, message: str):
        super().__init__(message)
        self.alias = alias


class MissingDataTypeError(ProjectionError):
    """The property type references a data type that does not exist."""

    def __init__(self, alias: str, data_type_id: int):
        super().__init__(
            alias,
            f"Property '{alias}' references data type {data_type_id}, "
            f"which could not be found.",
        )
        self.data_type_id = data_type_id


class MissingEditorError(ProjectionError):
    """The data type names a property editor that is not registered."""

    def __init__(self, alias: str, editor_alias: str):
        super().__init__(
            alias,
            f"Property '{alias}' uses the editor '{editor_alias}', "
            f"which is not registered.",
        )
        self.editor_alias = editor_alias


class UnknownMediaTypeError(CmsError):
    """A media item was requested for a media type that is not registered."""


class SoftHookError(CmsError):
    """A save hook failed in a way that must not abort the save."""


class FileMetadataError(SoftHookError):
    """Reading an uploaded file for its metadata failed."""

    def __init__(self, reference: str, message: str):
        super().__init__(message)
        self.reference = reference


class SoftHookErrors(SoftHookError):
    """Several soft failures raised together by one hook call.

    Attributes
    ----------
    errors : list[SoftHookError]
        The individual failures, in the order they happened.
    """

    def __init__(self, errors):
        super().__init__("; ".join(str(e) for e in errors))
        self.errors = list(errors)
