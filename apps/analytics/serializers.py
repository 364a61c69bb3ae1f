"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    PeriodQuerySerializer - Validates period preset and custom date range
    AnalyticsQuerySerializer - Period query defaulting to the current week
    DrilldownQuerySerializer - Period query plus the item to drill into

Response Serializers:
    SalesReportSerializer - Item sales, revenue, expenses, profit
    DashboardResponseSerializer - KPIs, trend, top items, breakdowns
    DrilldownResponseSerializer - Daily quantities of one item
"""

from rest_framework import serializers

from .periods import Period, resolve_period


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Used by: past orders, expenditures, sales_report

    Query Parameters:
        period (str): Preset - today, week, month, year, range, 7days,
            30days, quarter, ytd
        start_date (date): Start of a custom range
        end_date (date): End of a custom range
        anchor (date): Day treated as today (defaults to the current date)

    Note:
        The preset is resolved into ``start_date`` / ``end_date`` in
        validated_data. A ``range`` with a missing bound resolves to
        None / None (no filtering).
    """

    period = serializers.ChoiceField(
        choices=Period.choices,
        default=Period.TODAY,
        help_text='Period preset'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    anchor = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if attrs['period'] == Period.RANGE and start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        attrs['start_date'], attrs['end_date'] = resolve_period(
            attrs['period'], start=start, end=end, anchor=attrs.get('anchor')
        )
        return attrs


class AnalyticsQuerySerializer(PeriodQuerySerializer):
    """Period query for the analytics dashboard, defaults to this week."""

    period = serializers.ChoiceField(
        choices=Period.choices,
        default=Period.WEEK,
        help_text='Period preset'
    )


class DrilldownQuerySerializer(AnalyticsQuerySerializer):
    item = serializers.CharField(max_length=200, help_text='Item name as sold')


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class ItemSalesSerializer(serializers.Serializer):
    name = serializers.CharField()
    quantity = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class ReportExpenditureSerializer(serializers.Serializer):
    item = serializers.CharField()
    category = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField()
    payment_mode = serializers.CharField()


class SalesReportSerializer(serializers.Serializer):
    """Response serializer for the sales report."""
    period = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    items = ItemSalesSerializer(many=True)
    expenditures = ReportExpenditureSerializer(many=True)
    orders_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    sales_cash = serializers.DecimalField(max_digits=12, decimal_places=2)
    sales_upi = serializers.DecimalField(max_digits=12, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=12, decimal_places=2)
    expenses_cash = serializers.DecimalField(max_digits=12, decimal_places=2)
    expenses_upi = serializers.DecimalField(max_digits=12, decimal_places=2)
    profit = serializers.DecimalField(max_digits=12, decimal_places=2)


class KpiSerializer(serializers.Serializer):
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=12, decimal_places=2)
    profit = serializers.DecimalField(max_digits=12, decimal_places=2)


class TrendPointSerializer(serializers.Serializer):
    """Nested serializer for a single day of the trend."""
    date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=12, decimal_places=2)
    profit = serializers.DecimalField(max_digits=12, decimal_places=2)
    revenue_7d_avg = serializers.DecimalField(max_digits=12, decimal_places=2)


class TopItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    quantity = serializers.IntegerField()


class BreakdownEntrySerializer(serializers.Serializer):
    label = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for the analytics dashboard."""
    period = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    kpis = KpiSerializer()
    daily_trend = TrendPointSerializer(many=True)
    top_items = TopItemSerializer(many=True)
    payment_modes = serializers.DictField(child=serializers.IntegerField())
    expenditure_breakdown = BreakdownEntrySerializer(many=True)


class DrilldownPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    quantity = serializers.IntegerField()


class DrilldownResponseSerializer(serializers.Serializer):
    """Response serializer for one item's daily sales."""
    item = serializers.CharField()
    data = DrilldownPointSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
