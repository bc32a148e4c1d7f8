"""
Test settings – base settings with a fixed secret and a GraphQL endpoint
that is never contacted (tests swap in an in-memory client).
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from .base import *  # noqa: E402, F401, F403

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

GRAPHQL_ENDPOINT = "http://graphql.invalid/v1/graphql"
GRAPHQL_ADMIN_SECRET = ""

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
