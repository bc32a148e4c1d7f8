"""
apps.exporters.services.exporter_manager
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
All business logic for tenant exporters.

Batch writes follow the same shape as
:mod:`apps.credentials.services.credential_manager`, with one more rule: an
exporter that names a credential must find it in the same tenant, and the
credential's type must pair with the exporter type
(:data:`~apps.exporters.validators.EXPORTER_CREDENTIAL_TYPES`).
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

import structlog

from apps.credentials.services import ExistingEntry, WriteResult
from apps.credentials.store import CredentialInfo, CredentialStore
from apps.exporters.serializers import ExporterInputSerializer
from apps.exporters.store import ExporterInfo, ExporterStore
from apps.exporters.validators import validate_exporter_config, validate_exporter_types
from common.exceptions import BackendError, NotFoundError, ValidationError, flatten_detail
from common.graphql_client import GraphQLClient, GraphQLError
from common.timestamps import now_timestamp
from common.validators import to_json, validate_name
from common.yaml_codec import enumerate_documents

logger = structlog.get_logger(__name__)


class ExporterManager:
    """CRUD over the exporters of one tenant at a time."""

    def __init__(self, client: GraphQLClient) -> None:
        self.store = ExporterStore(client)
        self.credentials = CredentialStore(client)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self, tenant_id: str) -> list[ExporterInfo]:
        try:
            exporters = self.store.list(tenant_id)
        except GraphQLError as exc:
            raise BackendError(f"Listing exporters failed: {exc}") from exc
        logger.debug("exporters_listed", tenant_id=tenant_id, count=len(exporters))
        return exporters

    def _get_id(self, tenant_id: str, name: str) -> str:
        try:
            exporter_id = self.store.get_id_by_name(tenant_id, name)
        except GraphQLError as exc:
            raise BackendError(f"Getting exporter ID failed: {exc}") from exc
        if exporter_id is None:
            raise NotFoundError(f"Exporter not found: {name}")
        return exporter_id

    def get(self, tenant_id: str, name: str) -> ExporterInfo:
        exporter_id = self._get_id(tenant_id, name)
        try:
            exporter = self.store.get(tenant_id, exporter_id)
        except GraphQLError as exc:
            raise BackendError(f"Getting exporter failed: {exc}") from exc
        if exporter is None:
            raise NotFoundError(f"Exporter not found: {name}")
        return exporter

    def existing_entries(self, tenant_id: str) -> dict[str, ExistingEntry]:
        return {
            exporter.name: ExistingEntry(id=exporter.id, type=exporter.type)
            for exporter in self.list(tenant_id)
        }

    def referenced_credential(
        self, tenant_id: str, exporter_name: str, credential_name: str
    ) -> CredentialInfo:
        """
        Look up the credential *credential_name* referenced by exporter
        *exporter_name*.

        Raises:
            NotFoundError: If the tenant has no such credential.
            BackendError: If the credential cannot be read.
        """
        try:
            credential_id = self.credentials.get_id_by_name(tenant_id, credential_name)
            credential = (
                self.credentials.get(tenant_id, credential_id) if credential_id else None
            )
        except GraphQLError as exc:
            raise BackendError(
                f"Failed to read credential {credential_name} referenced in exporter "
                f"{exporter_name}: {exc}"
            ) from exc
        if credential is None:
            raise NotFoundError(
                f"Missing credential {credential_name} referenced in exporter {exporter_name}"
            )
        return credential

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def delete(self, tenant_id: str, name: str) -> str:
        exporter_id = self._get_id(tenant_id, name)
        try:
            deleted_id = self.store.delete(tenant_id, exporter_id)
        except GraphQLError as exc:
            raise BackendError(f"Deleting exporter failed: {exc}") from exc
        if deleted_id is None:
            raise NotFoundError(f"Exporter not found: {name}")
        logger.info("exporter_deleted", tenant_id=tenant_id, name=name, id=deleted_id)
        return deleted_id

    def validate(
        self,
        name: str,
        exporter_type: str,
        config: object,
        prior: ExistingEntry | None,
        credential: CredentialInfo | None,
    ) -> str:
        """
        Validate one exporter and return its effective type (the stored type
        when an update omits it). The name is checked by the caller.
        """
        if prior is not None:
            if exporter_type and exporter_type != prior.type:
                raise ValidationError(
                    f"Exporter '{name}' type cannot be updated "
                    f"(current={prior.type}, updated={exporter_type})"
                )
            exporter_type = prior.type
        if not exporter_type:
            raise ValidationError(f"Exporter '{name}' is missing a type")
        validate_exporter_config(name, config)
        try:
            validate_exporter_types(exporter_type, credential.type if credential else None)
        except ValidationError as exc:
            raise ValidationError(f"Invalid exporter input {name}: {exc}") from exc
        return exporter_type

    def write_batch(self, tenant_id: str, documents: Iterable[Any]) -> WriteResult:
        """
        Insert or update every exporter in *documents*.

        Raises:
            ValidationError: If any document fails to decode or validate, if
                a name repeats within the batch, or if there are no documents.
            NotFoundError: If a referenced credential does not exist.
            BackendError: If the store fails.
        """
        existing = self.existing_entries(tenant_id)
        now = now_timestamp()

        credentials: dict[str, CredentialInfo] = {}
        inserts: list[dict] = []
        updates: list[tuple[str, dict]] = []
        seen: set[str] = set()
        for index, document in enumerate_documents(documents, "exporter"):
            serializer = ExporterInputSerializer(data=document)
            if not serializer.is_valid():
                raise ValidationError(
                    f"Decoding exporter input at index={index} failed: "
                    f"{flatten_detail(serializer.errors)}"
                )
            entry = serializer.validated_data
            name = entry["name"]
            config = entry["config"] if entry["config"] is not None else {}
            try:
                config_json = to_json(name, config)
            except ValueError as exc:
                raise ValidationError(
                    f"Parsing exporter input at index={index} failed: {exc}"
                ) from exc

            validate_name(name)
            credential = None
            credential_name = entry["credential"]
            if credential_name:
                if credential_name not in credentials:
                    credentials[credential_name] = self.referenced_credential(
                        tenant_id, name, credential_name
                    )
                credential = credentials[credential_name]

            prior = existing.get(name)
            exporter_type = self.validate(name, entry["type"], config, prior, credential)
            if name in seen:
                raise ValidationError(f"Exporter '{name}' appears more than once in the input")
            seen.add(name)

            credential_id = credential.id if credential else None
            requested_id = str(entry["id"]) if "id" in entry else None
            if prior is None:
                inserts.append({
                    "id": requested_id or str(uuid.uuid4()),
                    "name": name,
                    "type": exporter_type,
                    "credential_id": credential_id,
                    "config": config_json,
                    "created_at": now,
                    "updated_at": now,
                })
            else:
                if requested_id and requested_id != prior.id:
                    raise ValidationError(
                        f"Exporter '{name}' id cannot be updated "
                        f"(current={prior.id}, updated={requested_id})"
                    )
                updates.append((name, {
                    "id": prior.id,
                    "credential_id": credential_id,
                    "config": config_json,
                    "updated_at": now,
                }))

        if not inserts and not updates:
            logger.debug("exporters_write_empty", tenant_id=tenant_id)
            raise ValidationError("Missing exporter YAML data in request body")

        logger.debug(
            "exporters_writing",
            tenant_id=tenant_id,
            inserts=len(inserts),
            updates=len(updates),
        )

        if inserts:
            try:
                self.store.insert(tenant_id, inserts)
            except GraphQLError as exc:
                raise BackendError(f"Creating {len(inserts)} exporters failed: {exc}") from exc

        for name, update in updates:
            try:
                self.store.update(tenant_id, update)
            except GraphQLError as exc:
                raise BackendError(f"Updating exporter {name} failed: {exc}") from exc

        result = WriteResult(
            inserted=[insert["name"] for insert in inserts],
            updated=[name for name, _ in updates],
        )
        logger.info(
            "exporters_written",
            tenant_id=tenant_id,
            inserted=len(result.inserted),
            updated=len(result.updated),
        )
        return result
