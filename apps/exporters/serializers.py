"""
apps.exporters.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the Exporters API.
No business logic; shape validation only.
"""
from rest_framework import serializers

from common.serializers import StrictSerializer


class ExporterInputSerializer(StrictSerializer):
    """One document of a POST /exporters/ YAML stream."""

    id = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=255, trim_whitespace=False)
    type = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default="", trim_whitespace=False
    )
    credential = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=False,
        help_text="Name of a credential of the same tenant.",
    )
    config = serializers.JSONField(required=False, allow_null=True, default=dict)


class ExporterInfoSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    type = serializers.CharField(read_only=True)
    credential = serializers.CharField(read_only=True)
    config = serializers.JSONField(read_only=True)
    created_at = serializers.CharField(read_only=True)
    updated_at = serializers.CharField(read_only=True)
