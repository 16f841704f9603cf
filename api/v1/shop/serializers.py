"""
Serializers for Shop API endpoints.
"""

from rest_framework import serializers


class ProductTierSerializer(serializers.Serializer):
    """Serializer for a catalog tier."""

    code = serializers.CharField()
    display_name = serializers.CharField()
    price = serializers.IntegerField()
    duration_days = serializers.IntegerField(allow_null=True)
    key_prefix = serializers.CharField()
    is_perpetual = serializers.BooleanField()


class PaymentMethodSerializer(serializers.Serializer):
    """Serializer for a payment method."""

    code = serializers.CharField()
    display_name = serializers.CharField()


class CatalogResponseSerializer(serializers.Serializer):
    """Serializer for the catalog response."""

    tiers = ProductTierSerializer(many=True)
    payment_methods = PaymentMethodSerializer(many=True)


class CreateOrderRequestSerializer(serializers.Serializer):
    """Serializer for create order request."""

    tier = serializers.CharField(required=True, max_length=20)
    email = serializers.EmailField(required=True)
    payment_method = serializers.CharField(required=True, max_length=20)
    qq = serializers.CharField(required=False, allow_blank=True, max_length=20)
    note = serializers.CharField(required=False, allow_blank=True, max_length=500)


class ConfirmPaymentRequestSerializer(serializers.Serializer):
    """Serializer for the optional evidence of a simulated payment."""

    transaction_id = serializers.CharField(required=False, max_length=64)
    payer = serializers.CharField(required=False, max_length=254)
    amount = serializers.IntegerField(required=False, min_value=0)


class FindOrderRequestSerializer(serializers.Serializer):
    """Serializer for order search request."""

    order_id = serializers.CharField(required=False, allow_blank=True, max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True)

    def validate(self, attrs):
        """Require at least one lookup field."""
        if not attrs.get("order_id") and not attrs.get("email"):
            raise serializers.ValidationError("Provide order_id or email")
        return attrs


class PaymentDetailsSerializer(serializers.Serializer):
    """Serializer for PaymentDetailsDTO."""

    amount = serializers.IntegerField()
    transaction_id = serializers.CharField(allow_null=True)
    payer = serializers.CharField(allow_null=True)
    paid_amount = serializers.IntegerField(allow_null=True)
    paid_at = serializers.DateTimeField(allow_null=True)


class OrderSerializer(serializers.Serializer):
    """Serializer for OrderDTO (shared with the admin API)."""

    id = serializers.CharField()
    tier = serializers.CharField()
    status = serializers.CharField()
    email = serializers.EmailField()
    price = serializers.IntegerField()
    payment_method = serializers.CharField()
    created_at = serializers.DateTimeField()
    paid_at = serializers.DateTimeField(allow_null=True)
    license_key = serializers.CharField(allow_null=True)
    payment_details = PaymentDetailsSerializer()
    extra = serializers.DictField()


class IssuedLicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    key = serializers.CharField()
    tier = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    order_id = serializers.CharField()
    owner_email = serializers.EmailField()
    activation_count = serializers.IntegerField()
    max_activations = serializers.IntegerField()


class PaymentConfirmationSerializer(serializers.Serializer):
    """Serializer for PaymentConfirmationDTO."""

    payment_id = serializers.CharField()
    order = OrderSerializer()
    license = IssuedLicenseSerializer()


class FindOrderResponseSerializer(serializers.Serializer):
    """Serializer for order search response."""

    order = OrderSerializer(allow_null=True)
