"""
common.validators
~~~~~~~~~~~~~~~~~
Pure-Python checks shared by the credential and exporter apps.

No view, serializer, or GraphQL imports are allowed here; the only project
dependency is the shared exception hierarchy.

Public API:
    validate_name(name)      – raise ValidationError unless *name* is a DNS-1123 label
    to_json(name, value)     – encode a decoded YAML value as a JSON string
"""
from __future__ import annotations

import json
import re

from common.exceptions import ValidationError

#: Names end up in Kubernetes object names, so they follow RFC 1123 labels.
NAME_MAX_LENGTH = 63
_NAME_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def validate_name(name: str) -> None:
    """
    Raise :class:`ValidationError` unless *name* is a lowercase DNS-1123
    label of at most :data:`NAME_MAX_LENGTH` characters.
    """
    if not name:
        raise ValidationError("Name must not be empty.")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Invalid name '{name}': must be no more than {NAME_MAX_LENGTH} characters."
        )
    if not _NAME_RE.fullmatch(name):
        raise ValidationError(
            f"Invalid name '{name}': must consist of lower case alphanumeric characters "
            "or '-', and must start and end with an alphanumeric character."
        )


def _check_json_compatible(value: object, path: str) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"{path}: mapping key {key!r} is not a string")
            _check_json_compatible(item, f"{path}.{key}")
    elif isinstance(value, list):
        for position, item in enumerate(value):
            _check_json_compatible(item, f"{path}[{position}]")
    elif value is not None and not isinstance(value, (str, int, float, bool)):
        raise ValueError(f"{path}: unsupported value of type {type(value).__name__}")


def to_json(name: str, value: object) -> str:
    """
    Encode the decoded YAML *value* of entry *name* as compact JSON.

    Raises:
        ValueError: If *value* holds non-string mapping keys or values that
            have no JSON representation (binary, sets, NaN, ...).
    """
    _check_json_compatible(value, name or "value")
    try:
        return json.dumps(value, allow_nan=False, separators=(",", ":"))
    except ValueError as exc:
        raise ValueError(f"{name}: {exc}") from exc
