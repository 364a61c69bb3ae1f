import pytest
from decimal import Decimal
from apps.orders.exceptions import OrderSubmissionError
from apps.pos.cart import SellableItem
from apps.pos.registry import TabRegistry


class FakeOrder:
    def __init__(self, order_number, items, payment_mode, total_amount):
        self.order_number = order_number
        self.items = items
        self.payment_mode = payment_mode
        self.total_amount = total_amount


class FakeGateway:
    """Records submissions; fails the calls whose 1-based index is in fail_on."""

    def __init__(self, fail_on=(), reason='Database unavailable'):
        self.calls = []
        self.fail_on = set(fail_on)
        self.reason = reason

    def submit(self, *, items, payment_mode, total_amount):
        self.calls.append({
            'items': items,
            'payment_mode': payment_mode,
            'total_amount': total_amount,
        })
        if len(self.calls) in self.fail_on:
            raise OrderSubmissionError(self.reason)
        return FakeOrder(len(self.calls), items, payment_mode, total_amount)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def failing_gateway():
    return FakeGateway(fail_on={1})


@pytest.fixture
def secondary_failing_gateway():
    return FakeGateway(fail_on={2}, reason='UPI row rejected')


@pytest.fixture
def cappuccino_item():
    return SellableItem('11111111-1111-1111-1111-111111111111', 'Cappuccino', Decimal('50.00'), 'Coffee')


@pytest.fixture
def sandwich_item():
    return SellableItem('22222222-2222-2222-2222-222222222222', 'Sandwich', Decimal('60.00'), 'Food')


@pytest.fixture
def registry():
    return TabRegistry()


@pytest.fixture
def loaded_registry(registry, cappuccino_item, sandwich_item):
    """Active tab "Order 1": Cappuccino x2 @ 50 + Sandwich x1 @ 60 = 160."""
    registry.add_to_cart(cappuccino_item)
    registry.add_to_cart(cappuccino_item)
    registry.add_to_cart(sandwich_item)
    registry.notifier.drain()
    return registry
