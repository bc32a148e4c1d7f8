"""
apps.exporters.urls
~~~~~~~~~~~~~~~~~~~
URL routing for the Exporters application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import ExporterDetailView, ExporterListView

urlpatterns = [
    # GET, POST /api/v1/tenants/<tenant>/exporters/
    path(
        "tenants/<str:tenant>/exporters/",
        ExporterListView.as_view(),
        name="exporter-list",
    ),
    # GET, DELETE /api/v1/tenants/<tenant>/exporters/<name>/
    path(
        "tenants/<str:tenant>/exporters/<str:name>/",
        ExporterDetailView.as_view(),
        name="exporter-detail",
    ),
]
