"""
apps.tenants.views
~~~~~~~~~~~~~~~~~~
Base view for every endpoint scoped by a tenant name in the URL.
"""
from __future__ import annotations

from rest_framework.views import APIView

from apps.tenants.services import TenantResolver
from common import graphql_client


class TenantScopedAPIView(APIView):
    """
    Resolves the ``tenant`` URL kwarg to a tenant ID before delegating to a
    service.
    """

    def get_client(self) -> graphql_client.GraphQLClient:
        return graphql_client.get_client()

    def resolve_tenant(self, tenant: str) -> str:
        return TenantResolver(self.get_client()).resolve(tenant)
