"""
apps.credentials.services package.
"""
from .credential_manager import CredentialManager, ExistingEntry, WriteResult  # noqa: F401
