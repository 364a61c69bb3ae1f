"""
Open order tabs of one operator at one café.

The registry is an ordered list of tabs plus the id of the active one.
It is never empty: removing the last tab (by deleting or submitting it)
immediately opens a fresh "Order N" tab and activates it.

Example:
    Taking an order and charging it split across cash and UPI::

        registry = TabRegistry()
        registry.add_to_cart(SellableItem.from_menu_item(cappuccino))
        registry.add_to_cart(SellableItem.from_menu_item(sandwich))

        tab = registry.active_tab
        tab.set_payment_mode(TabPaymentMode.SPLIT)
        tab.set_split_amounts(Decimal('100'), Decimal('60'))

        result = registry.submit_order(tab.id, gateway)
        # result.status == SubmissionStatus.SUBMITTED
        # two orders persisted: Cash 100.00 with the items,
        # UPI 60.00 as a single "Order 1_upi" line
"""

import logging

from django.db import models

from apps.orders.exceptions import OrderSubmissionError
from .exceptions import ConfirmationRequiredError, InvalidSplitPaymentError
from .money import format_money
from .naming import next_order_name
from .notifications import Notifier
from .payments import Charge, allocate_split
from .tabs import OrderTab

logger = logging.getLogger(__name__)


class SubmissionStatus(models.TextChoices):
    SUBMITTED = 'submitted', 'Submitted'
    INVALID = 'invalid', 'Invalid payment'
    FAILED = 'failed', 'Failed'
    # Primary order persisted, secondary rejected. Not rolled back.
    PARTIAL_FAILURE = 'partial_failure', 'Partially submitted'


class SubmissionResult:

    def __init__(self, status, tab_name, message, orders=(), charges=()):
        self.status = status
        self.tab_name = tab_name
        self.message = message
        self.orders = list(orders)
        self.charges = list(charges)

    @property
    def ok(self):
        return self.status == SubmissionStatus.SUBMITTED

    def __repr__(self):
        return f"<SubmissionResult {self.status} {self.tab_name!r}>"


class TabRegistry:

    def __init__(self, tabs=None, active_id=None, next_id=1, notifier=None):
        self.tabs = list(tabs or [])
        self.active_id = active_id
        self.next_id = max([next_id] + [tab.id + 1 for tab in self.tabs])
        self.notifier = notifier or Notifier()
        self._settle()

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, tab_id):
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    @property
    def active_tab(self):
        return self.get(self.active_id)

    @property
    def names(self):
        return [tab.name for tab in self.tabs]

    def _settle(self):
        """Keep the registry non-empty with a valid active tab."""
        if not self.tabs:
            self._open_tab()
        elif self.get(self.active_id) is None:
            self.active_id = self.tabs[0].id

    def _open_tab(self):
        tab = OrderTab(tab_id=self.next_id, name=next_order_name(self.names))
        self.next_id += 1
        self.tabs.append(tab)
        self.active_id = tab.id
        return tab

    def _remove(self, tab_id):
        tab = self.get(tab_id)
        if tab is None:
            return None
        self.tabs.remove(tab)
        if self.active_id == tab_id:
            self.active_id = self.tabs[0].id if self.tabs else None
        self._settle()
        return tab

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    def add_new_order(self) -> OrderTab:
        """Open an empty tab with the lowest free name and make it active."""
        return self._open_tab()

    def switch_order(self, tab_id) -> bool:
        """Activate tab_id. Unknown ids leave the active tab unchanged."""
        if self.get(tab_id) is None:
            return False
        self.active_id = tab_id
        return True

    def delete_order(self, tab_id, confirmed=False) -> bool:
        """
        Close a tab without charging it.

        Raises:
            ConfirmationRequiredError: The tab still has items and the
                deletion was not confirmed. Nothing is changed.
        """
        tab = self.get(tab_id)
        if tab is None:
            return False

        if not tab.cart.is_empty() and not confirmed:
            raise ConfirmationRequiredError(
                f"{tab.name} has {tab.cart.item_count()} item(s) in the cart. Delete it anyway?",
                tab_id=tab_id,
            )

        self._remove(tab_id)
        self.notifier.info(f"{tab.name} deleted")
        return True

    # -------------------------------------------------------------------------
    # Cart of the active tab
    # -------------------------------------------------------------------------

    def add_to_cart(self, item):
        tab = self.active_tab
        line = tab.cart.add_line(item)
        self.notifier.success(f"{item.name} added to {tab.name}")
        return line

    def increment_line(self, identifier):
        return self.active_tab.cart.increment_line(identifier)

    def decrement_line(self, identifier):
        return self.active_tab.cart.decrement_line(identifier)

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit_order(self, tab_id, gateway):
        """
        Charge a tab and persist it through the gateway.

        The gateway gets one order per charge: a single order for Cash or
        UPI, two orders for Cash&UPI (see :func:`allocate_split`). On
        success the tab is closed. On any failure the tab is kept as it was.

        Args:
            tab_id: Tab to submit.
            gateway: Object with ``submit(*, items, payment_mode,
                total_amount)`` returning the persisted order and raising
                OrderSubmissionError on rejection.

        Returns:
            SubmissionResult, or None when the tab does not exist or its
            cart is empty (nothing to submit).
        """
        tab = self.get(tab_id)
        if tab is None or tab.cart.is_empty():
            return None

        # Everything below works on the snapshot only
        snapshot = tab.snapshot()
        total = snapshot.cart.total()
        items = snapshot.cart.line_items()

        if snapshot.is_split:
            try:
                charges = list(allocate_split(snapshot.cash_amount, snapshot.upi_amount, total))
            except InvalidSplitPaymentError as e:
                self.notifier.error(str(e))
                return SubmissionResult(SubmissionStatus.INVALID, snapshot.name, str(e))
        else:
            charges = [Charge(snapshot.payment_mode.value, total)]

        primary = charges[0]
        try:
            primary_order = gateway.submit(
                items=items,
                payment_mode=primary.mode,
                total_amount=primary.amount,
            )
        except OrderSubmissionError as e:
            message = f"Failed to submit {snapshot.name}: {e.reason}"
            logger.warning(message)
            self.notifier.error(message)
            return SubmissionResult(SubmissionStatus.FAILED, snapshot.name, message, charges=charges)

        orders = [primary_order]

        if len(charges) == 2:
            secondary = charges[1]
            secondary_items = [{
                'menu_item_id': None,
                'name': f"{snapshot.name}_{secondary.mode.lower()}",
                'quantity': 1,
                'unit_price': secondary.amount,
            }]
            try:
                orders.append(gateway.submit(
                    items=secondary_items,
                    payment_mode=secondary.mode,
                    total_amount=secondary.amount,
                ))
            except OrderSubmissionError as e:
                message = (
                    f"{snapshot.name}: {primary.mode} {format_money(primary.amount)} was saved as "
                    f"order #{primary_order.order_number}, but the {secondary.mode} "
                    f"{format_money(secondary.amount)} part failed: {e.reason}"
                )
                logger.error(message)
                self.notifier.error(message)
                return SubmissionResult(
                    SubmissionStatus.PARTIAL_FAILURE, snapshot.name, message,
                    orders=orders, charges=charges,
                )

        self._remove(tab_id)

        paid = ' + '.join(f"{charge.mode} {format_money(charge.amount)}" for charge in charges)
        message = f"Order #{primary_order.order_number} submitted ({paid})"
        logger.info("%s: %s", snapshot.name, message)
        self.notifier.success(message)
        return SubmissionResult(
            SubmissionStatus.SUBMITTED, snapshot.name, message,
            orders=orders, charges=charges,
        )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self):
        return {
            'active_id': self.active_id,
            'next_id': self.next_id,
            'tabs': [tab.to_dict() for tab in self.tabs],
        }

    @classmethod
    def from_dict(cls, data, notifier=None):
        return cls(
            tabs=[OrderTab.from_dict(entry) for entry in data.get('tabs', [])],
            active_id=data.get('active_id'),
            next_id=data.get('next_id', 1),
            notifier=notifier,
        )
