"""
common.graphql_client
~~~~~~~~~~~~~~~~~~~~~
Thin synchronous GraphQL-over-HTTP client for the configuration store.

Documents are parsed with graphql-core when they are declared, so a typo in
a query fails at import time instead of on the first request.  The client
holds no request-scoped state and wraps a single ``httpx.Client`` connection
pool, so one instance is shared by every request handled by the process.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from django.conf import settings
from graphql import OperationDefinitionNode, parse
from graphql.error import GraphQLSyntaxError

from common.exceptions import BackendError

logger = structlog.get_logger(__name__)

ADMIN_SECRET_HEADER = "X-Hasura-Admin-Secret"


class GraphQLError(BackendError):
    """Transport failure or a response carrying GraphQL ``errors``."""

    default_code = "graphql_error"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors or []
        if self.errors:
            message = f"{message}: " + "; ".join(
                str(error.get("message", error)) for error in self.errors
            )
        super().__init__(message)


@dataclass(frozen=True)
class GraphQLDocument:
    """A validated GraphQL document holding exactly one named operation."""

    source: str
    operation_name: str


def gql(source: str) -> GraphQLDocument:
    """
    Parse *source* and return it as a :class:`GraphQLDocument`.

    Raises:
        ValueError: If the document does not parse or does not contain
            exactly one named operation.
    """
    try:
        ast = parse(source)
    except GraphQLSyntaxError as exc:
        raise ValueError(f"Invalid GraphQL document: {exc}") from exc

    operations = [
        definition
        for definition in ast.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]
    if len(operations) != 1 or operations[0].name is None:
        raise ValueError("GraphQL document must contain exactly one named operation.")
    return GraphQLDocument(source=source.strip(), operation_name=operations[0].name.value)


class GraphQLClient:
    """
    Executes :class:`GraphQLDocument` operations against one endpoint.

    Args:
        endpoint: Full URL of the GraphQL endpoint.
        admin_secret: Optional value for the ``X-Hasura-Admin-Secret`` header.
        timeout: Transport timeout in seconds.
        transport: Optional ``httpx`` transport, used by tests.
    """

    def __init__(
        self,
        endpoint: str,
        admin_secret: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {ADMIN_SECRET_HEADER: admin_secret} if admin_secret else {}
        self.endpoint = endpoint
        self._http = httpx.Client(headers=headers, timeout=timeout, transport=transport)

    def execute(
        self,
        document: GraphQLDocument,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Run *document* with *variables* and return the ``data`` object.

        Raises:
            GraphQLError: On transport failures, non-2xx responses, bodies
                that are not JSON, or responses carrying ``errors``.
        """
        payload = {
            "query": document.source,
            "variables": variables or {},
            "operationName": document.operation_name,
        }
        try:
            response = self._http.post(self.endpoint, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            logger.warning(
                "graphql_transport_failed",
                operation=document.operation_name,
                error=str(exc),
            )
            raise GraphQLError(f"{document.operation_name} request failed: {exc}") from exc
        except ValueError as exc:
            raise GraphQLError(
                f"{document.operation_name} returned a non-JSON body: {exc}"
            ) from exc

        if not isinstance(body, dict):
            raise GraphQLError(
                f"{document.operation_name} returned a {type(body).__name__}, not an object"
            )
        if body.get("errors"):
            logger.warning(
                "graphql_errors",
                operation=document.operation_name,
                errors=body["errors"],
            )
            raise GraphQLError(f"{document.operation_name} failed", errors=body["errors"])
        return body.get("data") or {}

    def close(self) -> None:
        self._http.close()


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_client: GraphQLClient | None = None
_client_lock = threading.Lock()


def get_client() -> GraphQLClient:
    """Return the shared client, building it from settings on first use."""
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = GraphQLClient(
                    endpoint=settings.GRAPHQL_ENDPOINT,
                    admin_secret=settings.GRAPHQL_ADMIN_SECRET or None,
                    timeout=settings.GRAPHQL_TIMEOUT,
                )
                logger.info("graphql_client_created", endpoint=settings.GRAPHQL_ENDPOINT)
    return _client
