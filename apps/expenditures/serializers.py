from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.analytics.serializers import PeriodQuerySerializer
from apps.orders.models import PaymentMode
from .models import Expenditure


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenditureFilterSerializer(PeriodQuerySerializer):
    """
    Validate query parameters for expenditure listing and exports.

    Query Parameters:
        period, start_date, end_date, anchor: see PeriodQuerySerializer
        category (str): Exact category
        payment_mode (str): Cash or UPI
    """

    category = serializers.CharField(required=False, allow_blank=True)
    payment_mode = serializers.ChoiceField(choices=PaymentMode.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenditureSerializer(serializers.ModelSerializer):
    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Expenditure
        fields = [
            'id',
            'cafe',
            'item',
            'category',
            'amount',
            'date',
            'payment_mode',
            'notes',
            'created_by',
            'created_at',
        ]
        read_only_fields = ['id', 'cafe', 'created_by', 'created_at']

    def validate_item(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Item cannot be blank.")
        return value


class ExpenditureListResponseSerializer(serializers.Serializer):
    """Response serializer for the filtered list with its total."""
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    count = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    results = ExpenditureSerializer(many=True)
