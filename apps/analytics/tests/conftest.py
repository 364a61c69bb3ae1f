import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from django.utils import timezone

from apps.expenditures.models import Expenditure
from apps.orders.models import Order
from apps.orders.services import submit_order


def _line(menu_item, quantity):
    return {
        'menu_item_id': str(menu_item.id),
        'name': menu_item.name,
        'quantity': quantity,
        'unit_price': menu_item.price,
    }


def _move_to(order, day):
    """Pretend the order was placed at noon on day."""
    created_at = timezone.make_aware(
        datetime(day.year, day.month, day.day, 12, 0)
    )
    Order.objects.filter(pk=order.pk).update(created_at=created_at, business_date=day)


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def todays_sales(cafe, cappuccino, sandwich):
    """
    Today: Cash 160 (Cappuccino x2, Sandwich x1) and UPI 50 (Cappuccino x1).
    """
    return [
        submit_order(
            cafe_id=cafe.id,
            items=[_line(cappuccino, 2), _line(sandwich, 1)],
            payment_mode='Cash',
            total_amount=Decimal('160.00'),
        ),
        submit_order(
            cafe_id=cafe.id,
            items=[_line(cappuccino, 1)],
            payment_mode='UPI',
            total_amount=Decimal('50.00'),
        ),
    ]


@pytest.fixture
def todays_expenditures(cafe):
    """Today: Milk 120 cash, Gas refill 950 UPI."""
    return [
        Expenditure.objects.create(cafe=cafe, item='Milk', category='Dairy', amount=Decimal('120.00')),
        Expenditure.objects.create(
            cafe=cafe, item='Gas refill', category='Utilities', amount=Decimal('950.00'), payment_mode='UPI',
        ),
    ]


@pytest.fixture
def earlier_sales(cafe, sandwich, today):
    """Two days ago: Cash 120 (Sandwich x2). Four days ago: Cash 60 (Sandwich x1)."""
    orders = []
    for days_ago, quantity in [(2, 2), (4, 1)]:
        order = submit_order(
            cafe_id=cafe.id,
            items=[_line(sandwich, quantity)],
            payment_mode='Cash',
            total_amount=sandwich.price * quantity,
        )
        _move_to(order, today - timedelta(days=days_ago))
        orders.append(order)
    return orders


@pytest.fixture
def other_cafe_sales(other_cafe):
    return submit_order(
        cafe_id=other_cafe.id,
        items=[{'menu_item_id': None, 'name': 'Latte', 'quantity': 5, 'unit_price': '80'}],
        payment_mode='Cash',
        total_amount='400',
    )
