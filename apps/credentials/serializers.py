"""
apps.credentials.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the Credentials API.
No business logic; shape validation only.
"""
from rest_framework import serializers

from common.serializers import StrictSerializer


class CredentialInputSerializer(StrictSerializer):
    """One document of a POST /credentials/ YAML stream."""

    id = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=255, trim_whitespace=False)
    type = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default="", trim_whitespace=False
    )
    value = serializers.JSONField()


class CredentialInfoSerializer(serializers.Serializer):
    """Read shape of a credential.  Never carries the secret ``value``."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    type = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True)
    updated_at = serializers.CharField(read_only=True)
