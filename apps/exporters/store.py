"""
apps.exporters.store
~~~~~~~~~~~~~~~~~~~~
GraphQL access for exporters.  Mirrors :mod:`apps.credentials.store`.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import structlog

from apps.exporters import queries
from common.graphql_client import GraphQLClient

logger = structlog.get_logger(__name__)


def decode_config(name: str, raw: Any) -> dict:
    """
    Decode the stored JSON config of exporter *name*.  Config that does not
    decode to a mapping is passed through untouched as ``{"json": raw}``.
    """
    if isinstance(raw, dict):
        return raw
    if raw is None:
        return {}
    try:
        config = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("exporter_config_undecodable", name=name, error=str(exc), config=raw)
        return {"json": raw}
    if not isinstance(config, dict):
        logger.warning("exporter_config_not_mapping", name=name, config=raw)
        return {"json": raw}
    return config


@dataclass(frozen=True)
class ExporterInfo:
    id: str
    name: str
    type: str
    credential: str | None = None
    config: dict = field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> ExporterInfo:
        credential = row.get("credential") or {}
        return cls(
            id=row["id"],
            name=row["name"],
            type=row.get("type") or "",
            credential=credential.get("name"),
            config=decode_config(row["name"], row.get("config")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


class ExporterStore:
    def __init__(self, client: GraphQLClient) -> None:
        self.client = client

    def list(self, tenant_id: str) -> list[ExporterInfo]:
        data = self.client.execute(queries.GET_EXPORTERS, {"tenant_id": tenant_id})
        return [ExporterInfo.from_row(row) for row in data.get("exporter") or []]

    def get_id_by_name(self, tenant_id: str, name: str) -> str | None:
        data = self.client.execute(
            queries.GET_EXPORTER_ID_BY_NAME, {"tenant_id": tenant_id, "name": name}
        )
        rows = data.get("exporter") or []
        if len(rows) != 1:
            return None
        return rows[0]["id"]

    def get(self, tenant_id: str, exporter_id: str) -> ExporterInfo | None:
        data = self.client.execute(
            queries.GET_EXPORTER, {"tenant_id": tenant_id, "id": exporter_id}
        )
        rows = data.get("exporter") or []
        if len(rows) != 1:
            return None
        return ExporterInfo.from_row(rows[0])

    def delete(self, tenant_id: str, exporter_id: str) -> str | None:
        data = self.client.execute(
            queries.DELETE_EXPORTER, {"tenant_id": tenant_id, "id": exporter_id}
        )
        returning = (data.get("delete_exporter") or {}).get("returning") or []
        if len(returning) != 1:
            return None
        return returning[0]["id"]

    def insert(self, tenant_id: str, inserts: list[dict]) -> None:
        objects = [{**insert, "tenant_id": tenant_id} for insert in inserts]
        self.client.execute(queries.CREATE_EXPORTERS, {"exporters": objects})

    def update(self, tenant_id: str, update: dict) -> None:
        self.client.execute(queries.UPDATE_EXPORTER, {**update, "tenant_id": tenant_id})
