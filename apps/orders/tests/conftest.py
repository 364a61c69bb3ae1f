import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from apps.orders.models import Order
from apps.orders.services import submit_order


@pytest.fixture
def cart_items(cappuccino, sandwich):
    return [
        {'menu_item_id': str(cappuccino.id), 'name': 'Cappuccino', 'quantity': 2, 'unit_price': Decimal('50.00')},
        {'menu_item_id': str(sandwich.id), 'name': 'Sandwich', 'quantity': 1, 'unit_price': Decimal('60.00')},
    ]


@pytest.fixture
def todays_order(cafe, cart_items, staff_user):
    return submit_order(
        cafe_id=cafe.id,
        items=cart_items,
        payment_mode='Cash',
        total_amount=Decimal('160.00'),
        submitted_by=staff_user,
    )


@pytest.fixture
def last_months_order(cafe, cart_items):
    order = submit_order(
        cafe_id=cafe.id,
        items=cart_items[:1],
        payment_mode='UPI',
        total_amount=Decimal('100.00'),
    )
    created_at = timezone.now() - timedelta(days=40)
    Order.objects.filter(pk=order.pk).update(
        created_at=created_at,
        business_date=timezone.localdate(created_at),
    )
    order.refresh_from_db()
    return order
