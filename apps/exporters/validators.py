"""
apps.exporters.validators
~~~~~~~~~~~~~~~~~~~~~~~~~
Exporter type rules: which credential type, if any, each exporter type
pairs with.

Public API:
    EXPORTER_CREDENTIAL_TYPES                      – the pairing table
    validate_exporter_types(exporter_type, credential_type)
    validate_exporter_config(name, config)
"""
from __future__ import annotations

from apps.credentials.validators import AWS_KEY, AZURE_SERVICE_PRINCIPAL, GCP_SERVICE_ACCOUNT
from common.exceptions import ValidationError

#: Exporter type → required credential type.  ``None`` means the exporter
#: runs without a credential and must not reference one.
EXPORTER_CREDENTIAL_TYPES: dict[str, str | None] = {
    "cloudwatch": AWS_KEY,
    "stackdriver": GCP_SERVICE_ACCOUNT,
    "azure": AZURE_SERVICE_PRINCIPAL,
    "blackbox": None,
}


def validate_exporter_types(exporter_type: str, credential_type: str | None) -> None:
    """
    Check *exporter_type* against the credential it references.

    Args:
        exporter_type: Declared (or stored) exporter type.
        credential_type: Type of the referenced credential, or ``None`` when
            the exporter references no credential.

    Raises:
        ValidationError: For unknown exporter types and for any pairing not
            listed in :data:`EXPORTER_CREDENTIAL_TYPES`.
    """
    if exporter_type not in EXPORTER_CREDENTIAL_TYPES:
        expected = ", ".join(sorted(EXPORTER_CREDENTIAL_TYPES))
        raise ValidationError(
            f"unsupported exporter type: '{exporter_type}' (expected one of: {expected})"
        )

    required = EXPORTER_CREDENTIAL_TYPES[exporter_type]
    if required is None:
        if credential_type is not None:
            raise ValidationError(f"{exporter_type} exporter does not accept a credential")
        return
    if credential_type is None:
        raise ValidationError(f"{exporter_type} exporter requires a {required} credential")
    if credential_type != required:
        raise ValidationError(
            f"{exporter_type} exporter requires a {required} credential, "
            f"got {credential_type}"
        )


def validate_exporter_config(name: str, config: object) -> None:
    if not isinstance(config, dict):
        raise ValidationError(f"Exporter '{name}' config must be a mapping")
