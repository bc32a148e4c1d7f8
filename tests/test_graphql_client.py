"""
tests.test_graphql_client
~~~~~~~~~~~~~~~~~~~~~~~~~
Covers:
- gql()              (document validation)
- GraphQLClient      (wire format via httpx.MockTransport)
- TenantResolver     (tenant name → ID)
- /health/           (store reachability)
"""
from __future__ import annotations

import json

import httpx
import pytest

from apps.tenants.services import TenantInfo, TenantResolver
from common.exceptions import BackendError, NotFoundError
from common.graphql_client import ADMIN_SECRET_HEADER, GraphQLClient, GraphQLError, gql

ENDPOINT = "http://graphql.test/v1/graphql"
PING = gql("query Ping { __typename }")


def make_client(handler, admin_secret=None) -> GraphQLClient:
    return GraphQLClient(ENDPOINT, admin_secret=admin_secret, transport=httpx.MockTransport(handler))


# ===========================================================================
# gql()
# ===========================================================================

class TestGql:

    def test_operation_name_extracted(self):
        document = gql("mutation DoThing($id: uuid!) { thing(id: $id) { id } }")
        assert document.operation_name == "DoThing"

    def test_syntax_error(self):
        with pytest.raises(ValueError, match="Invalid GraphQL document"):
            gql("query Broken { ")

    def test_anonymous_operation_rejected(self):
        with pytest.raises(ValueError, match="exactly one named operation"):
            gql("{ __typename }")

    def test_two_operations_rejected(self):
        with pytest.raises(ValueError):
            gql("query A { __typename } query B { __typename }")


# ===========================================================================
# GraphQLClient
# ===========================================================================

class TestGraphQLClient:

    def test_posts_query_variables_and_operation_name(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            captured["secret"] = request.headers.get(ADMIN_SECRET_HEADER)
            return httpx.Response(200, json={"data": {"__typename": "query_root"}})

        data = make_client(handler, admin_secret="hunter2").execute(PING, {"x": 1})

        assert data == {"__typename": "query_root"}
        assert captured["url"] == ENDPOINT
        assert captured["body"]["operationName"] == "Ping"
        assert captured["body"]["variables"] == {"x": 1}
        assert "query Ping" in captured["body"]["query"]
        assert captured["secret"] == "hunter2"

    def test_no_secret_header_when_unset(self):
        def handler(request):
            assert ADMIN_SECRET_HEADER not in request.headers
            return httpx.Response(200, json={"data": {}})

        assert make_client(handler).execute(PING) == {}

    def test_errors_in_body_raise(self):
        def handler(request):
            return httpx.Response(200, json={"errors": [{"message": "field not found"}]})

        with pytest.raises(GraphQLError) as exc_info:
            make_client(handler).execute(PING)
        assert "Ping failed: field not found" in str(exc_info.value)
        assert exc_info.value.errors == [{"message": "field not found"}]

    def test_http_status_error_raises(self):
        with pytest.raises(GraphQLError, match="Ping request failed"):
            make_client(lambda request: httpx.Response(502, text="bad gateway")).execute(PING)

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GraphQLError, match="connection refused"):
            make_client(handler).execute(PING)

    def test_non_json_body_raises(self):
        with pytest.raises(GraphQLError, match="non-JSON"):
            make_client(lambda request: httpx.Response(200, text="<html>")).execute(PING)

    def test_non_object_body_raises(self):
        with pytest.raises(GraphQLError, match="Ping returned a list, not an object"):
            make_client(lambda request: httpx.Response(200, json=[1])).execute(PING)

    def test_graphql_error_is_backend_error(self):
        assert issubclass(GraphQLError, BackendError)


# ===========================================================================
# TenantResolver
# ===========================================================================

class TestTenantResolver:

    def test_resolve(self, fake_graphql, tenant_id):
        assert TenantResolver(fake_graphql).resolve("acme") == tenant_id

    def test_unknown_tenant(self, fake_graphql):
        with pytest.raises(NotFoundError, match="Tenant ghost not found"):
            TenantResolver(fake_graphql).resolve("ghost")

    def test_ambiguous_name_not_found(self, fake_graphql):
        fake_graphql.add_tenant("twin")
        fake_graphql.add_tenant("twin")
        with pytest.raises(NotFoundError):
            TenantResolver(fake_graphql).resolve("twin")

    def test_store_failure(self, fake_graphql):
        fake_graphql.failures["GetTenantByName"] = "down"
        with pytest.raises(BackendError, match="Fetching tenant acme failed"):
            TenantResolver(fake_graphql).resolve("acme")

    def test_get_by_id(self, fake_graphql, tenant_id):
        resolver = TenantResolver(fake_graphql)
        assert resolver.get_by_id(tenant_id) == TenantInfo(id=tenant_id, name="acme")
        assert resolver.get_by_id("00000000-0000-0000-0000-000000000000") is None


# ===========================================================================
# Health endpoint
# ===========================================================================

class TestHealthEndpoint:

    def test_healthy(self, api_client, fake_graphql):
        resp = api_client.get("/health/")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "graphql": "ok"}

    def test_store_unreachable(self, api_client, fake_graphql):
        fake_graphql.failures["HealthCheck"] = "connection refused"
        resp = api_client.get("/health/")
        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "degraded"
        assert "connection refused" in body["graphql"]
