"""
tests.conftest
~~~~~~~~~~~~~~
Shared fixtures.  The GraphQL store is replaced by :class:`FakeGraphQLClient`,
an in-memory stand-in that answers the operations the app sends, keyed by
operation name, with the same row shapes the real store returns.
"""
from __future__ import annotations

import uuid

import pytest
from rest_framework.test import APIClient

from common import graphql_client
from common.graphql_client import GraphQLError

_CREDENTIAL_FIELDS = ("id", "name", "type", "created_at", "updated_at")
_EXPORTER_FIELDS = ("id", "name", "type", "config", "created_at", "updated_at")


class FakeGraphQLClient:
    """
    In-memory tables ``tenant``, ``credential`` and ``exporter``.

    Attributes:
        calls: ``(operation_name, variables)`` for every executed operation.
        failures: operation name → error message; matching operations raise
            :class:`GraphQLError` instead of running.
    """

    def __init__(self) -> None:
        self.tenants: dict[str, dict] = {}
        self.credentials: dict[str, dict] = {}
        self.exporters: dict[str, dict] = {}
        self.calls: list[tuple[str, dict]] = []
        self.failures: dict[str, str] = {}

    # -- helpers used by tests ---------------------------------------------

    def add_tenant(self, name: str) -> str:
        tenant_id = str(uuid.uuid4())
        self.tenants[tenant_id] = {"id": tenant_id, "name": name}
        return tenant_id

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    def credential_named(self, tenant_id: str, name: str) -> dict | None:
        return next(
            (
                row for row in self.credentials.values()
                if row["tenant_id"] == tenant_id and row["name"] == name
            ),
            None,
        )

    def exporter_named(self, tenant_id: str, name: str) -> dict | None:
        return next(
            (
                row for row in self.exporters.values()
                if row["tenant_id"] == tenant_id and row["name"] == name
            ),
            None,
        )

    # -- GraphQLClient interface -------------------------------------------

    def execute(self, document, variables=None) -> dict:
        variables = dict(variables or {})
        operation = document.operation_name
        self.calls.append((operation, variables))
        if operation in self.failures:
            raise GraphQLError(f"{operation} failed", errors=[{"message": self.failures[operation]}])
        return getattr(self, f"_op_{operation}")(**variables)

    # -- operations --------------------------------------------------------

    def _op_HealthCheck(self) -> dict:
        return {"__typename": "query_root"}

    def _op_GetTenantByName(self, name):
        return {"tenant": [dict(t) for t in self.tenants.values() if t["name"] == name]}

    def _op_GetTenantById(self, id):
        tenant = self.tenants.get(id)
        return {"tenant_by_pk": dict(tenant) if tenant else None}

    @staticmethod
    def _rows(table: dict, tenant_id: str, **filters) -> list[dict]:
        rows = [
            row for row in table.values()
            if row["tenant_id"] == tenant_id
            and all(row[key] == value for key, value in filters.items())
        ]
        return sorted(rows, key=lambda row: row["name"])

    @staticmethod
    def _insert(table: dict, objects: list[dict], kind: str) -> dict:
        keys = {(row["tenant_id"], row["name"]) for row in table.values()}
        for obj in objects:
            key = (obj["tenant_id"], obj["name"])
            if key in keys or obj["id"] in table:
                raise GraphQLError(
                    f"Insert {kind} failed",
                    errors=[{"message": f'Uniqueness violation on {kind} "{obj["name"]}"'}],
                )
            keys.add(key)
        for obj in objects:
            table[obj["id"]] = dict(obj)
        return {"returning": [{"id": obj["id"]} for obj in objects]}

    def _credential_view(self, row: dict) -> dict:
        return {field: row[field] for field in _CREDENTIAL_FIELDS}

    def _op_GetCredentials(self, tenant_id):
        return {"credential": [self._credential_view(r) for r in self._rows(self.credentials, tenant_id)]}

    def _op_GetCredentialIdByName(self, tenant_id, name):
        rows = self._rows(self.credentials, tenant_id, name=name)
        return {"credential": [{"id": r["id"]} for r in rows]}

    def _op_GetCredential(self, tenant_id, id):
        rows = self._rows(self.credentials, tenant_id, id=id)
        return {"credential": [self._credential_view(r) for r in rows]}

    def _op_DeleteCredential(self, tenant_id, id):
        rows = self._rows(self.credentials, tenant_id, id=id)
        if rows and any(e["credential_id"] == id for e in self.exporters.values()):
            raise GraphQLError(
                "DeleteCredential failed",
                errors=[{"message": "Foreign key violation on exporter.credential_id"}],
            )
        for row in rows:
            del self.credentials[row["id"]]
        return {"delete_credential": {"returning": [{"id": r["id"]} for r in rows]}}

    def _op_CreateCredentials(self, credentials):
        return {"insert_credential": self._insert(self.credentials, credentials, "credential")}

    def _op_UpdateCredential(self, tenant_id, id, value, updated_at):
        rows = self._rows(self.credentials, tenant_id, id=id)
        for row in rows:
            row.update(value=value, updated_at=updated_at)
        return {"update_credential": {"returning": [{"id": r["id"]} for r in rows]}}

    def _exporter_view(self, row: dict) -> dict:
        view = {field: row[field] for field in _EXPORTER_FIELDS}
        credential = self.credentials.get(row["credential_id"]) if row["credential_id"] else None
        view["credential"] = {"name": credential["name"]} if credential else None
        return view

    def _op_GetExporters(self, tenant_id):
        return {"exporter": [self._exporter_view(r) for r in self._rows(self.exporters, tenant_id)]}

    def _op_GetExporterIdByName(self, tenant_id, name):
        rows = self._rows(self.exporters, tenant_id, name=name)
        return {"exporter": [{"id": r["id"]} for r in rows]}

    def _op_GetExporter(self, tenant_id, id):
        rows = self._rows(self.exporters, tenant_id, id=id)
        return {"exporter": [self._exporter_view(r) for r in rows]}

    def _op_DeleteExporter(self, tenant_id, id):
        rows = self._rows(self.exporters, tenant_id, id=id)
        for row in rows:
            del self.exporters[row["id"]]
        return {"delete_exporter": {"returning": [{"id": r["id"]} for r in rows]}}

    def _op_CreateExporters(self, exporters):
        return {"insert_exporter": self._insert(self.exporters, exporters, "exporter")}

    def _op_UpdateExporter(self, tenant_id, id, credential_id, config, updated_at):
        rows = self._rows(self.exporters, tenant_id, id=id)
        for row in rows:
            row.update(credential_id=credential_id, config=config, updated_at=updated_at)
        return {"update_exporter": {"returning": [{"id": r["id"]} for r in rows]}}


# ===========================================================================
# Fixtures
# ===========================================================================

@pytest.fixture
def fake_graphql(monkeypatch) -> FakeGraphQLClient:
    """Install a fresh in-memory store as the process-wide GraphQL client."""
    fake = FakeGraphQLClient()
    monkeypatch.setattr(graphql_client, "get_client", lambda: fake)
    return fake


@pytest.fixture
def tenant_id(fake_graphql: FakeGraphQLClient) -> str:
    """ID of a tenant called ``acme``."""
    return fake_graphql.add_tenant("acme")


@pytest.fixture
def api_client() -> APIClient:
    """Return an unauthenticated DRF APIClient."""
    return APIClient()
