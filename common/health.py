"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness + readiness probe.

Returns:
    200  {"status": "ok",   "graphql": "ok"}    – everything healthy
    503  {"status": "degraded", "graphql": "error: <msg>"} – store unreachable
"""
import structlog
from django.http import JsonResponse

from common import graphql_client
from common.graphql_client import GraphQLError, gql

logger = structlog.get_logger(__name__)

HEALTH_QUERY = gql("query HealthCheck { __typename }")


def health_check(request):
    """Return service health including GraphQL store reachability."""
    graphql_status: str
    http_status: int

    try:
        graphql_client.get_client().execute(HEALTH_QUERY)
        graphql_status = "ok"
        http_status = 200
    except GraphQLError as exc:
        graphql_status = f"error: {exc}"
        http_status = 503
        logger.error("health_check_graphql_failure", error=str(exc))

    payload = {
        "status": "ok" if http_status == 200 else "degraded",
        "graphql": graphql_status,
    }
    return JsonResponse(payload, status=http_status)
