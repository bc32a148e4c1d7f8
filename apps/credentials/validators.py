"""
apps.credentials.validators
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Value checks per credential type.

Known cloud credential types have a fixed value shape.  Any other type name
is accepted as a generic credential whose value only has to be a JSON
mapping or string.

Public API:
    validate_credential_type(name, credential_type)
    validate_credential_value(name, credential_type, value_json)
"""
from __future__ import annotations

import json
import re

from common.exceptions import ValidationError

AWS_KEY = "aws-key"
GCP_SERVICE_ACCOUNT = "gcp-service-account"
AZURE_SERVICE_PRINCIPAL = "azure-service-principal"

#: Credential types whose value is a mapping with exactly these string keys.
_REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    AWS_KEY: ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"),
    AZURE_SERVICE_PRINCIPAL: (
        "AZURE_SUBSCRIPTION_ID",
        "AZURE_TENANT_ID",
        "AZURE_CLIENT_ID",
        "AZURE_CLIENT_SECRET",
    ),
}

KNOWN_TYPES: frozenset[str] = frozenset({*_REQUIRED_KEYS, GCP_SERVICE_ACCOUNT})

_TYPE_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def validate_credential_type(name: str, credential_type: str) -> None:
    if not credential_type:
        raise ValidationError(f"Credential '{name}' is missing a type")
    if not _TYPE_RE.fullmatch(credential_type):
        raise ValidationError(
            f"Credential '{name}' has an invalid type '{credential_type}': "
            "must consist of lower case alphanumeric characters or '-'"
        )


def _validate_key_map(name: str, credential_type: str, value: object) -> None:
    expected = _REQUIRED_KEYS[credential_type]
    if not isinstance(value, dict):
        raise ValidationError(
            f"Credential '{name}' of type {credential_type} must be a mapping "
            f"with keys {', '.join(expected)}"
        )
    missing = [key for key in expected if key not in value]
    extra = sorted(key for key in value if key not in expected)
    if missing or extra:
        problems = []
        if missing:
            problems.append(f"missing {', '.join(missing)}")
        if extra:
            problems.append(f"unexpected {', '.join(extra)}")
        raise ValidationError(
            f"Credential '{name}' of type {credential_type} has invalid keys: "
            + "; ".join(problems)
        )
    for key in expected:
        if not isinstance(value[key], str) or not value[key]:
            raise ValidationError(
                f"Credential '{name}' value {key} must be a non-empty string"
            )


def _validate_service_account(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise ValidationError(
            f"Credential '{name}' of type {GCP_SERVICE_ACCOUNT} must be a string "
            "containing the service account JSON"
        )
    try:
        parsed = json.loads(value)
    except ValueError as exc:
        raise ValidationError(
            f"Credential '{name}' service account is not valid JSON: {exc}"
        ) from exc
    if not isinstance(parsed, dict):
        raise ValidationError(f"Credential '{name}' service account must be a JSON object")


def validate_credential_value(name: str, credential_type: str, value_json: str) -> None:
    """
    Check that *value_json* is well-formed JSON with the shape required by
    *credential_type*.

    Raises:
        ValidationError: Describing the first problem found.
    """
    try:
        value = json.loads(value_json)
    except ValueError as exc:
        raise ValidationError(f"Credential '{name}' value is not valid JSON: {exc}") from exc

    if credential_type in _REQUIRED_KEYS:
        _validate_key_map(name, credential_type, value)
    elif credential_type == GCP_SERVICE_ACCOUNT:
        _validate_service_account(name, value)
    elif not isinstance(value, (dict, str)) or not value:
        raise ValidationError(
            f"Credential '{name}' value must be a non-empty mapping or string"
        )
