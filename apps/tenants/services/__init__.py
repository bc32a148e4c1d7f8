"""
apps.tenants.services package.
"""
from .tenant_resolver import TenantInfo, TenantResolver  # noqa: F401
