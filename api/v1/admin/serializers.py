"""
Serializers for Admin API endpoints.
"""

from rest_framework import serializers

from api.v1.shop.serializers import OrderSerializer


class SalesStatisticsSerializer(serializers.Serializer):
    """Serializer for SalesStatisticsDTO."""

    total_sales = serializers.IntegerField()
    today_sales = serializers.IntegerField()
    total_orders = serializers.IntegerField()
    today_orders = serializers.IntegerField()
    total_licenses = serializers.IntegerField()
    today_licenses = serializers.IntegerField()
    revenue_by_tier = serializers.DictField(child=serializers.IntegerField())
    today_revenue_by_tier = serializers.DictField(child=serializers.IntegerField())
    last_reset_date = serializers.DateField()


class StatisticsResponseSerializer(serializers.Serializer):
    """Serializer for StatisticsDTO."""

    stats = SalesStatisticsSerializer()
    orders = serializers.IntegerField()
    licenses = serializers.IntegerField()
    payments = serializers.IntegerField()
    recent_orders = OrderSerializer(many=True)
