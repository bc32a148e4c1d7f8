"""
apps.tenants.services.tenant_resolver
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Maps tenant names to tenant IDs.

Every credential and exporter request names its tenant in the URL; the
stores key everything by tenant ID, so this lookup runs first on each
request.  Tenants are read-only here.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog

from apps.tenants import queries
from common.exceptions import BackendError, NotFoundError
from common.graphql_client import GraphQLClient, GraphQLError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TenantInfo:
    id: str
    name: str


class TenantResolver:
    """Tenant lookups against the GraphQL store."""

    def __init__(self, client: GraphQLClient) -> None:
        self.client = client

    def resolve(self, tenant_name: str) -> str:
        """
        Return the ID of the tenant called *tenant_name*.

        Raises:
            NotFoundError: If no single tenant carries that name.
            BackendError: If the lookup itself fails.
        """
        try:
            data = self.client.execute(queries.GET_TENANT_BY_NAME, {"name": tenant_name})
        except GraphQLError as exc:
            raise BackendError(f"Fetching tenant {tenant_name} failed: {exc}") from exc

        rows = data.get("tenant") or []
        if len(rows) != 1:
            raise NotFoundError(f"Tenant {tenant_name} not found")
        return rows[0]["id"]

    def get_by_id(self, tenant_id: str) -> TenantInfo | None:
        """Return the tenant with *tenant_id*, or ``None`` if there is none."""
        try:
            data = self.client.execute(queries.GET_TENANT_BY_ID, {"id": tenant_id})
        except GraphQLError as exc:
            raise BackendError(f"Fetching tenant {tenant_id} failed: {exc}") from exc

        row = data.get("tenant_by_pk")
        if not row or not row.get("id"):
            return None
        return TenantInfo(id=row["id"], name=row["name"])
