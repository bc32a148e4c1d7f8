"""
apps.exporters.views
~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for tenant exporters.
All business logic is delegated to
:class:`apps.exporters.services.ExporterManager`.

Endpoints
---------
GET    /tenants/{tenant}/exporters/         – List exporters with their config
POST   /tenants/{tenant}/exporters/         – Insert or update from a YAML stream
GET    /tenants/{tenant}/exporters/{name}/  – Get one exporter
DELETE /tenants/{tenant}/exporters/{name}/  – Delete one exporter
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from apps.exporters.services import ExporterManager
from apps.tenants.views import TenantScopedAPIView
from common.serializers import DeletedSerializer
from .serializers import ExporterInfoSerializer, ExporterInputSerializer


class ExporterListView(TenantScopedAPIView):
    """GET / POST /tenants/{tenant}/exporters/"""

    @extend_schema(
        summary="List Exporters",
        responses={
            200: ExporterInfoSerializer(many=True),
            404: OpenApiResponse(description="Tenant not found."),
        },
        tags=["Exporters"],
    )
    def get(self, request: Request, tenant: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        exporters = ExporterManager(self.get_client()).list(tenant_id)
        return Response(ExporterInfoSerializer(exporters, many=True).data)

    @extend_schema(
        summary="Write Exporters",
        description=(
            "Accepts a YAML stream of one or more exporter documents.  New names "
            "are inserted, existing names are updated.  An exporter's type cannot "
            "change, and a referenced credential must exist in the tenant with a "
            "type that pairs with the exporter type."
        ),
        request=ExporterInputSerializer,
        responses={
            200: OpenApiResponse(description="All exporters written; empty body."),
            400: OpenApiResponse(description="Malformed YAML, invalid entry, or empty stream."),
            404: OpenApiResponse(description="Tenant or referenced credential not found."),
        },
        tags=["Exporters"],
    )
    def post(self, request: Request, tenant: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        ExporterManager(self.get_client()).write_batch(tenant_id, request.data or ())
        return Response(status=status.HTTP_200_OK)


class ExporterDetailView(TenantScopedAPIView):
    """GET / DELETE /tenants/{tenant}/exporters/{name}/"""

    @extend_schema(
        summary="Get Exporter",
        responses={
            200: ExporterInfoSerializer,
            404: OpenApiResponse(description="Tenant or exporter not found."),
        },
        tags=["Exporters"],
    )
    def get(self, request: Request, tenant: str, name: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        exporter = ExporterManager(self.get_client()).get(tenant_id, name)
        return Response(ExporterInfoSerializer(exporter).data)

    @extend_schema(
        summary="Delete Exporter",
        responses={
            200: DeletedSerializer,
            404: OpenApiResponse(description="Tenant or exporter not found."),
        },
        tags=["Exporters"],
    )
    def delete(self, request: Request, tenant: str, name: str) -> Response:
        tenant_id = self.resolve_tenant(tenant)
        deleted_id = ExporterManager(self.get_client()).delete(tenant_id, name)
        return Response(DeletedSerializer({"id": deleted_id}).data)
