from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.analytics.serializers import PeriodQuerySerializer
from .models import Order, OrderItem, PaymentMode


# =============================================================================
# Input Serializers
# =============================================================================

class OrderFilterSerializer(PeriodQuerySerializer):
    """
    Validate query parameters for past orders.

    Query Parameters:
        period, start_date, end_date, anchor: see PeriodQuerySerializer
        payment_mode (str): Cash or UPI
    """

    payment_mode = serializers.ChoiceField(
        choices=PaymentMode.choices,
        required=False
    )


# =============================================================================
# Output Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'menu_item', 'item_name', 'quantity', 'price', 'subtotal']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with its items."""

    items = OrderItemSerializer(many=True, read_only=True)
    submitted_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'cafe',
            'order_number',
            'business_date',
            'payment_mode',
            'total_amount',
            'submitted_by',
            'created_at',
            'items',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight order listing with an items summary."""

    items_summary = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'business_date',
            'payment_mode',
            'total_amount',
            'created_at',
            'items_summary',
        ]
        read_only_fields = fields

    def get_items_summary(self, obj):
        return ', '.join(f"{item.item_name} x {item.quantity}" for item in obj.items.all())
