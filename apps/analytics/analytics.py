"""
Analytics Module
=================

This module provides the aggregate queries behind the sales report and
the analytics dashboard. It reads submitted orders and expenditures of a
café for a reporting period.

Classes:
    SalesQueries: Static methods for report and dashboard figures.

Key Features:
    - Item-wise sales, revenue, expenses and profit
    - Cash / UPI split of sales and expenses
    - Daily trend with a 7-day moving average of revenue
    - Top selling items and per-item daily drill-down
    - Expenditure breakdown by item

Example:
    This week's figures::

        from apps.analytics.analytics import SalesQueries
        from apps.analytics.periods import resolve_period

        start, end = resolve_period('week')
        report = SalesQueries.sales_report(cafe.id, start, end)
        print(f"Revenue: {report['revenue']}, profit: {report['profit']}")

Note:
    This module is read-only. All methods return plain dictionaries and
    lists with Decimal amounts; a ``None`` start/end means no date filter.
"""

from collections import OrderedDict
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce, TruncDate

from apps.expenditures.models import Expenditure
from apps.orders.models import Order, OrderItem, PaymentMode

ZERO = Decimal('0.00')
TOP_ITEMS_LIMIT = 10
TOP_EXPENDITURES_LIMIT = 15
MOVING_AVERAGE_WINDOW = 7


def _line_amount():
    return ExpressionWrapper(
        F('price') * F('quantity'),
        output_field=DecimalField(max_digits=12, decimal_places=2)
    )


def _sum_amount(field):
    return Coalesce(Sum(field), ZERO, output_field=DecimalField(max_digits=12, decimal_places=2))


def moving_average(values, window=MOVING_AVERAGE_WINDOW):
    """
    Trailing average over the last ``window`` points.

    The first points average over what is available, so the result has
    the same length as the input.
    """
    averages = []
    for index in range(len(values)):
        subset = values[max(0, index - window + 1):index + 1]
        averages.append((sum(subset, ZERO) / len(subset)).quantize(Decimal('0.01')))
    return averages


class SalesQueries:
    """
    Aggregate queries for the sales report and analytics endpoints.

    Methods:
        orders: Orders of a café in a period.
        expenditures: Expenditures of a café in a period.
        sales_report: Item sales, revenue, expenses, profit, mode split.
        kpis: Revenue, expenses and profit.
        daily_trend: Day-by-day revenue, expenses, profit and moving average.
        top_items: Best sellers by quantity.
        item_drilldown: Daily quantity of one item.
        payment_mode_counts: Number of orders per payment mode.
        expenditure_breakdown: Spending by item, long tail as "Others".
    """

    @staticmethod
    def orders(cafe_id, start_date=None, end_date=None):
        queryset = Order.objects.filter(cafe_id=cafe_id)
        if start_date and end_date:
            queryset = queryset.filter(
                created_at__date__gte=start_date,
                created_at__date__lte=end_date,
            )
        return queryset

    @staticmethod
    def expenditures(cafe_id, start_date=None, end_date=None):
        queryset = Expenditure.objects.filter(cafe_id=cafe_id)
        if start_date and end_date:
            queryset = queryset.filter(date__gte=start_date, date__lte=end_date)
        return queryset

    @staticmethod
    def item_sales(cafe_id, start_date=None, end_date=None):
        """
        Quantity and amount sold per item name, best sellers first.

        Items are grouped by the name recorded on the order, so renamed
        or deleted menu items keep their history.
        """
        order_ids = SalesQueries.orders(cafe_id, start_date, end_date).values('id')
        rows = (
            OrderItem.objects
            .filter(order_id__in=order_ids)
            .values('item_name')
            .annotate(
                total_quantity=Sum('quantity'),
                amount=_sum_amount(_line_amount()),
            )
            .order_by('-total_quantity', 'item_name')
        )
        return [
            {'name': row['item_name'], 'quantity': row['total_quantity'], 'amount': row['amount']}
            for row in rows
        ]

    @staticmethod
    def sales_report(cafe_id, start_date=None, end_date=None):
        """
        Sales report of a café for a period.

        Args:
            cafe_id (UUID): The café.
            start_date (date, optional): First day included.
            end_date (date, optional): Last day included.

        Returns:
            dict: A dictionary containing:
                - items (list[dict]): name, quantity, amount per item.
                - expenditures (list[dict]): item, category, amount, date,
                  payment_mode of every expenditure in the period.
                - orders_count (int): Number of orders.
                - revenue, sales_cash, sales_upi (Decimal): Order totals.
                - expenses, expenses_cash, expenses_upi (Decimal): Spending.
                - profit (Decimal): revenue - expenses.
        """
        orders = SalesQueries.orders(cafe_id, start_date, end_date)
        expenditures = SalesQueries.expenditures(cafe_id, start_date, end_date)

        sales = {row['payment_mode']: row for row in (
            orders.values('payment_mode')
            .annotate(total=_sum_amount('total_amount'), count=Count('id'))
            .order_by()
        )}
        spending = {row['payment_mode']: row['total'] for row in (
            expenditures.values('payment_mode')
            .annotate(total=_sum_amount('amount'))
            .order_by()
        )}

        sales_cash = sales.get(PaymentMode.CASH.value, {}).get('total', ZERO)
        sales_upi = sales.get(PaymentMode.UPI.value, {}).get('total', ZERO)
        expenses_cash = spending.get(PaymentMode.CASH.value, ZERO)
        expenses_upi = spending.get(PaymentMode.UPI.value, ZERO)
        revenue = sales_cash + sales_upi
        expenses = expenses_cash + expenses_upi

        return {
            'start_date': start_date,
            'end_date': end_date,
            'items': SalesQueries.item_sales(cafe_id, start_date, end_date),
            'expenditures': list(
                expenditures
                .order_by('date', 'created_at')
                .values('item', 'category', 'amount', 'date', 'payment_mode')
            ),
            'orders_count': sum(row['count'] for row in sales.values()),
            'revenue': revenue,
            'sales_cash': sales_cash,
            'sales_upi': sales_upi,
            'expenses': expenses,
            'expenses_cash': expenses_cash,
            'expenses_upi': expenses_upi,
            'profit': revenue - expenses,
        }

    @staticmethod
    def kpis(cafe_id, start_date=None, end_date=None):
        revenue = SalesQueries.orders(cafe_id, start_date, end_date).aggregate(
            total=_sum_amount('total_amount')
        )['total']
        expenses = SalesQueries.expenditures(cafe_id, start_date, end_date).aggregate(
            total=_sum_amount('amount')
        )['total']
        return {'revenue': revenue, 'expenses': expenses, 'profit': revenue - expenses}

    @staticmethod
    def daily_trend(cafe_id, start_date=None, end_date=None):
        """
        Revenue, expenses and profit per day.

        Only days with at least one order or expenditure are listed.
        ``revenue_7d_avg`` is the trailing average over the last seven
        listed days.
        """
        days = OrderedDict()

        revenue_rows = (
            SalesQueries.orders(cafe_id, start_date, end_date)
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(total=_sum_amount('total_amount'))
            .order_by('day')
        )
        expense_rows = (
            SalesQueries.expenditures(cafe_id, start_date, end_date)
            .values('date')
            .annotate(total=_sum_amount('amount'))
            .order_by('date')
        )

        for row in revenue_rows:
            days.setdefault(row['day'], {'revenue': ZERO, 'expenses': ZERO})['revenue'] = row['total']
        for row in expense_rows:
            days.setdefault(row['date'], {'revenue': ZERO, 'expenses': ZERO})['expenses'] = row['total']

        ordered_days = sorted(days)
        averages = moving_average([days[day]['revenue'] for day in ordered_days])

        return [
            {
                'date': day,
                'revenue': days[day]['revenue'],
                'expenses': days[day]['expenses'],
                'profit': days[day]['revenue'] - days[day]['expenses'],
                'revenue_7d_avg': average,
            }
            for day, average in zip(ordered_days, averages)
        ]

    @staticmethod
    def top_items(cafe_id, start_date=None, end_date=None, limit=TOP_ITEMS_LIMIT):
        return [
            {'name': item['name'], 'quantity': item['quantity']}
            for item in SalesQueries.item_sales(cafe_id, start_date, end_date)[:limit]
        ]

    @staticmethod
    def item_drilldown(cafe_id, item_name, start_date=None, end_date=None):
        """Quantity of one item sold on each day of the daily trend."""
        trend_days = [point['date'] for point in SalesQueries.daily_trend(cafe_id, start_date, end_date)]

        order_ids = SalesQueries.orders(cafe_id, start_date, end_date).values('id')
        sold = {
            row['day']: row['total_quantity'] for row in (
                OrderItem.objects
                .filter(order_id__in=order_ids, item_name=item_name)
                .annotate(day=TruncDate('order__created_at'))
                .values('day')
                .annotate(total_quantity=Sum('quantity'))
                .order_by('day')
            )
        }
        return {
            'item': item_name,
            'data': [{'date': day, 'quantity': sold.get(day, 0)} for day in trend_days],
        }

    @staticmethod
    def payment_mode_counts(cafe_id, start_date=None, end_date=None):
        counts = {mode: 0 for mode in PaymentMode.values}
        rows = (
            SalesQueries.orders(cafe_id, start_date, end_date)
            .values('payment_mode')
            .annotate(count=Count('id'))
            .order_by()
        )
        for row in rows:
            counts[row['payment_mode']] = row['count']
        return counts

    @staticmethod
    def expenditure_breakdown(cafe_id, start_date=None, end_date=None, limit=TOP_EXPENDITURES_LIMIT):
        """Spending per item, largest first; items beyond ``limit`` are summed as "Others"."""
        rows = list(
            SalesQueries.expenditures(cafe_id, start_date, end_date)
            .values('item')
            .annotate(total=_sum_amount('amount'))
            .order_by('-total', 'item')
        )
        breakdown = [{'label': row['item'], 'amount': row['total']} for row in rows[:limit]]

        rest = rows[limit:]
        if rest:
            breakdown.append({'label': 'Others', 'amount': sum((row['total'] for row in rest), ZERO)})
        return breakdown

    @staticmethod
    def dashboard(cafe_id, start_date=None, end_date=None):
        return {
            'start_date': start_date,
            'end_date': end_date,
            'kpis': SalesQueries.kpis(cafe_id, start_date, end_date),
            'daily_trend': SalesQueries.daily_trend(cafe_id, start_date, end_date),
            'top_items': SalesQueries.top_items(cafe_id, start_date, end_date),
            'payment_modes': SalesQueries.payment_mode_counts(cafe_id, start_date, end_date),
            'expenditure_breakdown': SalesQueries.expenditure_breakdown(cafe_id, start_date, end_date),
        }
