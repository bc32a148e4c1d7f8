"""
apps.credentials.store
~~~~~~~~~~~~~~~~~~~~~~
GraphQL access for credentials.  No validation happens here; callers get
plain records back and :class:`~common.graphql_client.GraphQLError` on
transport failures.
"""
from __future__ import annotations

from dataclasses import dataclass

from apps.credentials import queries
from common.graphql_client import GraphQLClient


@dataclass(frozen=True)
class CredentialInfo:
    """A credential as the API shows it: everything but the secret value."""

    id: str
    name: str
    type: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> CredentialInfo:
        return cls(
            id=row["id"],
            name=row["name"],
            type=row.get("type") or "",
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


class CredentialStore:
    def __init__(self, client: GraphQLClient) -> None:
        self.client = client

    def list(self, tenant_id: str) -> list[CredentialInfo]:
        data = self.client.execute(queries.GET_CREDENTIALS, {"tenant_id": tenant_id})
        return [CredentialInfo.from_row(row) for row in data.get("credential") or []]

    def get_id_by_name(self, tenant_id: str, name: str) -> str | None:
        data = self.client.execute(
            queries.GET_CREDENTIAL_ID_BY_NAME, {"tenant_id": tenant_id, "name": name}
        )
        rows = data.get("credential") or []
        if len(rows) != 1:
            return None
        return rows[0]["id"]

    def get(self, tenant_id: str, credential_id: str) -> CredentialInfo | None:
        data = self.client.execute(
            queries.GET_CREDENTIAL, {"tenant_id": tenant_id, "id": credential_id}
        )
        rows = data.get("credential") or []
        if len(rows) != 1:
            return None
        return CredentialInfo.from_row(rows[0])

    def delete(self, tenant_id: str, credential_id: str) -> str | None:
        """Delete one credential and return its ID, or ``None`` if nothing matched."""
        data = self.client.execute(
            queries.DELETE_CREDENTIAL, {"tenant_id": tenant_id, "id": credential_id}
        )
        returning = (data.get("delete_credential") or {}).get("returning") or []
        if len(returning) != 1:
            return None
        return returning[0]["id"]

    def insert(self, tenant_id: str, inserts: list[dict]) -> None:
        """Insert all *inserts* in one call.  Fails if any name already exists."""
        objects = [{**insert, "tenant_id": tenant_id} for insert in inserts]
        self.client.execute(queries.CREATE_CREDENTIALS, {"credentials": objects})

    def update(self, tenant_id: str, update: dict) -> None:
        self.client.execute(queries.UPDATE_CREDENTIAL, {**update, "tenant_id": tenant_id})
