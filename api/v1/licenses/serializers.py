"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class LicenseCheckRequestSerializer(serializers.Serializer):
    """Serializer for validate and activate requests."""

    key = serializers.CharField(required=True, max_length=64, trim_whitespace=True)
    device_id = serializers.CharField(required=True, max_length=500)


class LicenseViewSerializer(serializers.Serializer):
    """Serializer for LicenseViewDTO."""

    key = serializers.CharField()
    tier = serializers.CharField()
    status = serializers.CharField()
    expires_at = serializers.DateTimeField()
    activation_count = serializers.IntegerField()
    max_activations = serializers.IntegerField()
    activations_remaining = serializers.IntegerField()
    device_bound = serializers.BooleanField()
    remaining_days = serializers.IntegerField()
    last_used_at = serializers.DateTimeField(allow_null=True)
