"""
apps.credentials.services.credential_manager
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
All business logic for tenant credentials.

Views must call only :class:`CredentialManager`.  No business logic lives in
views or serializers.

Batch writes
------------
A POST carries a YAML stream of credential documents.  Every document is
decoded and validated before anything is written, so a single bad document
rejects the whole batch.  Names not yet known for the tenant become inserts,
all sent in one mutation; known names become updates, sent one by one.  An
update failing half way leaves the earlier updates applied.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from apps.credentials.serializers import CredentialInputSerializer
from apps.credentials.store import CredentialInfo, CredentialStore
from apps.credentials.validators import validate_credential_type, validate_credential_value
from common.exceptions import BackendError, NotFoundError, ValidationError, flatten_detail
from common.graphql_client import GraphQLClient, GraphQLError
from common.timestamps import now_timestamp
from common.validators import to_json, validate_name
from common.yaml_codec import enumerate_documents

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExistingEntry:
    """Prior state of a name within a tenant: what an update must respect."""

    id: str
    type: str


@dataclass
class WriteResult:
    inserted: list[str]
    updated: list[str]


class CredentialManager:
    """
    CRUD over the credentials of one tenant at a time.

    Args:
        client: Shared GraphQL client; the manager keeps no other state.
    """

    def __init__(self, client: GraphQLClient) -> None:
        self.store = CredentialStore(client)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self, tenant_id: str) -> list[CredentialInfo]:
        try:
            credentials = self.store.list(tenant_id)
        except GraphQLError as exc:
            raise BackendError(f"Listing credentials failed: {exc}") from exc
        logger.debug("credentials_listed", tenant_id=tenant_id, count=len(credentials))
        return credentials

    def _get_id(self, tenant_id: str, name: str) -> str:
        try:
            credential_id = self.store.get_id_by_name(tenant_id, name)
        except GraphQLError as exc:
            raise BackendError(f"Getting credential ID failed: {exc}") from exc
        if credential_id is None:
            raise NotFoundError(f"Credential not found: {name}")
        return credential_id

    def get(self, tenant_id: str, name: str) -> CredentialInfo:
        """
        Return the credential called *name*.

        Raises:
            NotFoundError: If the tenant has no such credential.
            BackendError: If the store cannot be read.
        """
        credential_id = self._get_id(tenant_id, name)
        try:
            credential = self.store.get(tenant_id, credential_id)
        except GraphQLError as exc:
            raise BackendError(f"Getting credential failed: {exc}") from exc
        if credential is None:
            raise NotFoundError(f"Credential not found: {name}")
        return credential

    def existing_entries(self, tenant_id: str) -> dict[str, ExistingEntry]:
        """Map each credential name of the tenant to its ID and type."""
        return {
            credential.name: ExistingEntry(id=credential.id, type=credential.type)
            for credential in self.list(tenant_id)
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def delete(self, tenant_id: str, name: str) -> str:
        """Delete the credential called *name* and return its ID."""
        credential_id = self._get_id(tenant_id, name)
        try:
            deleted_id = self.store.delete(tenant_id, credential_id)
        except GraphQLError as exc:
            raise BackendError(f"Deleting credential failed: {exc}") from exc
        if deleted_id is None:
            raise NotFoundError(f"Credential not found: {name}")
        logger.info("credential_deleted", tenant_id=tenant_id, name=name, id=deleted_id)
        return deleted_id

    def validate(
        self,
        name: str,
        credential_type: str,
        value_json: str,
        prior: ExistingEntry | None,
    ) -> str:
        """
        Validate one credential against the prior state of its name and
        return the effective type.  An update may omit the type, in which
        case the stored type applies.
        """
        validate_name(name)
        if prior is not None:
            if credential_type and credential_type != prior.type:
                raise ValidationError(
                    f"Credential '{name}' type cannot be updated "
                    f"(current={prior.type}, updated={credential_type})"
                )
            credential_type = prior.type
        validate_credential_type(name, credential_type)
        validate_credential_value(name, credential_type, value_json)
        return credential_type

    def write_batch(self, tenant_id: str, documents: Iterable[Any]) -> WriteResult:
        """
        Insert or update every credential in *documents*.

        Raises:
            ValidationError: If any document fails to decode or validate, if
                a name repeats within the batch, or if there are no documents.
            BackendError: If the insert or one of the updates fails.
        """
        existing = self.existing_entries(tenant_id)
        now = now_timestamp()

        inserts: list[dict] = []
        updates: list[tuple[str, dict]] = []
        seen: set[str] = set()
        for index, document in enumerate_documents(documents, "credential"):
            serializer = CredentialInputSerializer(data=document)
            if not serializer.is_valid():
                raise ValidationError(
                    f"Decoding credential input at index={index} failed: "
                    f"{flatten_detail(serializer.errors)}"
                )
            entry = serializer.validated_data
            name = entry["name"]
            try:
                value_json = to_json(name, entry["value"])
            except ValueError as exc:
                raise ValidationError(
                    f"Parsing credential input at index={index} failed: {exc}"
                ) from exc

            prior = existing.get(name)
            credential_type = self.validate(name, entry["type"], value_json, prior)
            if name in seen:
                raise ValidationError(f"Credential '{name}' appears more than once in the input")
            seen.add(name)

            requested_id = str(entry["id"]) if "id" in entry else None
            if prior is None:
                inserts.append({
                    "id": requested_id or str(uuid.uuid4()),
                    "name": name,
                    "type": credential_type,
                    "value": value_json,
                    "created_at": now,
                    "updated_at": now,
                })
            else:
                if requested_id and requested_id != prior.id:
                    raise ValidationError(
                        f"Credential '{name}' id cannot be updated "
                        f"(current={prior.id}, updated={requested_id})"
                    )
                updates.append((name, {
                    "id": prior.id,
                    "value": value_json,
                    "updated_at": now,
                }))

        if not inserts and not updates:
            logger.debug("credentials_write_empty", tenant_id=tenant_id)
            raise ValidationError("Missing credential YAML data in request body")

        logger.debug(
            "credentials_writing",
            tenant_id=tenant_id,
            inserts=len(inserts),
            updates=len(updates),
        )

        if inserts:
            try:
                self.store.insert(tenant_id, inserts)
            except GraphQLError as exc:
                raise BackendError(f"Creating {len(inserts)} credentials failed: {exc}") from exc

        for name, update in updates:
            try:
                self.store.update(tenant_id, update)
            except GraphQLError as exc:
                raise BackendError(f"Updating credential {name} failed: {exc}") from exc

        result = WriteResult(
            inserted=[insert["name"] for insert in inserts],
            updated=[name for name, _ in updates],
        )
        logger.info(
            "credentials_written",
            tenant_id=tenant_id,
            inserted=len(result.inserted),
            updated=len(result.updated),
        )
        return result
