from decimal import Decimal

from rest_framework import serializers

from apps.orders.serializers import OrderSerializer
from .payments import TabPaymentMode


# =============================================================================
# Input Serializers
# =============================================================================

class AddToCartSerializer(serializers.Serializer):
    """
    Add one unit to the active tab.

    Either ``menu_item`` (an item of the café's menu) or ``name`` and
    ``price`` of a custom item typed in at the till.
    """

    menu_item = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=200, required=False, allow_blank=False)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False
    )
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs.get('menu_item'):
            return attrs

        if not attrs.get('name', '').strip() or attrs.get('price') is None:
            raise serializers.ValidationError(
                'Provide a menu_item, or the name and price of a custom item'
            )
        return attrs


class PaymentSelectionSerializer(serializers.Serializer):
    """
    Payment mode of the active tab.

    Split amounts are optional and only checked when the tab is submitted.
    """

    payment_mode = serializers.ChoiceField(choices=TabPaymentMode.choices)
    cash_amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    upi_amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)


class DeleteTabQuerySerializer(serializers.Serializer):
    confirm = serializers.BooleanField(default=False)


# =============================================================================
# Output Serializers
# =============================================================================

class CartLineSerializer(serializers.Serializer):
    identifier = serializers.CharField()
    menu_item_id = serializers.CharField(allow_null=True)
    name = serializers.CharField(source='item.name')
    category = serializers.CharField(source='item.category')
    is_custom = serializers.BooleanField(source='item.is_custom')
    unit_price = serializers.DecimalField(source='item.price', max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class OrderTabSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    payment_mode = serializers.CharField()
    cash_amount = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    upi_amount = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    lines = CartLineSerializer(source='cart.lines', many=True)
    total = serializers.DecimalField(source='cart.total', max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField(source='cart.item_count')


class NotificationSerializer(serializers.Serializer):
    level = serializers.CharField()
    message = serializers.CharField()


class PosStateSerializer(serializers.Serializer):
    """Open tabs of the operator. Every POS endpoint responds with this."""
    active_id = serializers.IntegerField()
    tabs = OrderTabSerializer(many=True)


class PosResponseSerializer(PosStateSerializer):
    """Documentation only: state plus the transient notifications."""
    messages = NotificationSerializer(many=True)
    notification_ttl = serializers.IntegerField()


class SubmissionSerializer(serializers.Serializer):
    status = serializers.CharField()
    tab_name = serializers.CharField()
    message = serializers.CharField()
    orders = OrderSerializer(many=True)


class UpiQrSerializer(serializers.Serializer):
    tab_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    upi_uri = serializers.CharField()
    qr_png_base64 = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
