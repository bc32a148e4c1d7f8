"""
apps.credentials.views
~~~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for tenant credentials.
All business logic is delegated to
:class:`apps.credentials.services.CredentialManager`.

Endpoints
---------
GET    /tenants/{tenant}/credentials/         – List credentials (no values)
POST   /tenants/{tenant}/credentials/         – Insert or update from a YAML stream
GET    /tenants/{tenant}/credentials/{name}/  – Get one credential (no value)
DELETE /tenants/{tenant}/credentials/{name}/  – Delete one credential
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from apps.credentials.services import CredentialManager
from apps.tenants.views import TenantScopedAPIView
from common.serializers import DeletedSerializer
from .serializers import CredentialInfoSerializer, CredentialInputSerializer


class CredentialListView(TenantScopedAPIView):
    """GET / POST /tenants/{tenant}/credentials/"""

    @extend_schema(
        summary="List Credentials",
        description="Lists every credential of the tenant.  Secret values are never returned.",
        responses={
            200: CredentialInfoSerializer(many=True),
            404: OpenApiResponse(description="Tenant not found."),
        },
        tags=["Credentials"],
    )
    def get(self, request: Request, tenant: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        credentials = CredentialManager(self.get_client()).list(tenant_id)
        return Response(CredentialInfoSerializer(credentials, many=True).data)

    @extend_schema(
        summary="Write Credentials",
        description=(
            "Accepts a YAML stream of one or more credential documents.  New names "
            "are inserted, existing names are updated.  A credential's type cannot "
            "change.  Any invalid document rejects the whole stream."
        ),
        request=CredentialInputSerializer,
        responses={
            200: OpenApiResponse(description="All credentials written; empty body."),
            400: OpenApiResponse(description="Malformed YAML, invalid entry, or empty stream."),
            404: OpenApiResponse(description="Tenant not found."),
        },
        tags=["Credentials"],
    )
    def post(self, request: Request, tenant: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        CredentialManager(self.get_client()).write_batch(tenant_id, request.data or ())
        return Response(status=status.HTTP_200_OK)


class CredentialDetailView(TenantScopedAPIView):
    """GET / DELETE /tenants/{tenant}/credentials/{name}/"""

    @extend_schema(
        summary="Get Credential",
        responses={
            200: CredentialInfoSerializer,
            404: OpenApiResponse(description="Tenant or credential not found."),
        },
        tags=["Credentials"],
    )
    def get(self, request: Request, tenant: str, name: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        credential = CredentialManager(self.get_client()).get(tenant_id, name)
        return Response(CredentialInfoSerializer(credential).data)

    @extend_schema(
        summary="Delete Credential",
        responses={
            200: DeletedSerializer,
            404: OpenApiResponse(description="Tenant or credential not found."),
        },
        tags=["Credentials"],
    )
    def delete(self, request: Request, tenant: str, name: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        deleted_id = CredentialManager(self.get_client()).delete(tenant_id, name)
        return Response(DeletedSerializer({"id": deleted_id}).data)
