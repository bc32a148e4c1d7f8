"""
common.serializers
~~~~~~~~~~~~~~~~~~
Serializer base classes shared by the API apps.
"""
from rest_framework import serializers


class StrictSerializer(serializers.Serializer):
    """
    Serializer that rejects input keys it does not declare.

    DRF silently drops unknown keys; configuration uploads treat them as a
    typo and refuse the whole document instead.
    """

    def to_internal_value(self, data):
        if isinstance(data, dict):
            unknown = sorted(str(key) for key in data if key not in self.fields)
            if unknown:
                raise serializers.ValidationError(
                    {key: ["Unknown field."] for key in unknown}
                )
        return super().to_internal_value(data)


class DeletedSerializer(serializers.Serializer):
    """Response shape of a successful DELETE."""

    id = serializers.CharField(read_only=True)
