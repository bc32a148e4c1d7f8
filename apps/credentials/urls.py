"""
apps.credentials.urls
~~~~~~~~~~~~~~~~~~~~~
URL routing for the Credentials application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import CredentialDetailView, CredentialListView

urlpatterns = [
    # GET, POST /api/v1/tenants/<tenant>/credentials/
    path(
        "tenants/<str:tenant>/credentials/",
        CredentialListView.as_view(),
        name="credential-list",
    ),
    # GET, DELETE /api/v1/tenants/<tenant>/credentials/<name>/
    path(
        "tenants/<str:tenant>/credentials/<str:name>/",
        CredentialDetailView.as_view(),
        name="credential-detail",
    ),
]
