"""
cms/models/validators.py -- Property value validation.

Checks the values on a content or media item against the rules carried by
each property type:

    - Mandatory properties must have a value.
    - Values must match the property type's validation pattern, if any.

These run on already-loaded entities and never raise for bad data; every
problem becomes a human-readable message.

Usage::

    from cms.models.validators import validate_content

    issues = validate_content(entity)
"""

from __future__ import annotations

import logging
import re
from typing import Any

from cms.models.base import ContentBase, Property

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Single-property checks
# ------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, dict)) and len(value) == 0:
        return True
    return False


def validate_mandatory(prop: Property, entity_name: str) -> list[str]:
    """Return a message if *prop* is mandatory but empty."""
    if prop.property_type.mandatory and _is_empty(prop.value):
        label = prop.property_type.name or prop.alias
        return [f"'{entity_name}' requires a value for '{label}'."]
    return []


def validate_pattern(prop: Property, entity_name: str) -> list[str]:
    """Return a message if *prop*'s value does not match its pattern.

    Empty values are not checked; that is the mandatory check's job.
    An invalid pattern is reported as a schema problem.
    """
    pattern = prop.property_type.validation_regexp
    if not pattern or _is_empty(prop.value):
        return []

    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        logger.warning("Invalid validation pattern on '%s': %s", prop.alias, exc)
        return [
            f"The validation pattern on '{prop.alias}' is not a valid "
            f"regular expression ({exc})."
        ]

    if isinstance(prop.value, (dict, list)):
        return []
    if compiled.fullmatch(str(prop.value)) is None:
        label = prop.property_type.name or prop.alias
        return [
            f"The value of '{label}' on '{entity_name}' does not match "
            f"the expected format."
        ]
    return []


# ------------------------------------------------------------------
# Entity-level checks
# ------------------------------------------------------------------

def validate_property_values(entity: ContentBase) -> dict[str, list[str]]:
    """Validate every property on *entity*.

    Returns
    -------
    dict[str, list[str]]
        Property alias -> messages, only for properties with problems.
    """
    entity_name = entity.name or f"item {entity.id}"
    issues: dict[str, list[str]] = {}
    for prop in entity.properties:
        messages = validate_mandatory(prop, entity_name) + validate_pattern(prop, entity_name)
        if messages:
            issues[prop.alias] = messages
    return issues


def validate_content(entity: ContentBase) -> list[str]:
    """Validate *entity* and return a flat list of messages."""
    return [
        message
        for messages in validate_property_values(entity).values()
        for message in messages
    ]
