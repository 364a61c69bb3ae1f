"""
Tender modes of an open tab and split payment allocation.

A tab is paid in Cash, UPI, or split across both (Cash&UPI). Persisted
orders only know Cash and UPI, so a split tab is submitted as two orders:
the larger share (primary) with all the items, and the smaller share
(secondary) as a single synthetic line.
"""

from collections import namedtuple

from django.db import models

from .exceptions import InvalidSplitPaymentError
from .money import format_money, to_money


class TabPaymentMode(models.TextChoices):
    CASH = 'Cash', 'Cash'
    UPI = 'UPI', 'UPI'
    SPLIT = 'Cash&UPI', 'Cash & UPI'


Charge = namedtuple('Charge', ['mode', 'amount'])


def allocate_split(cash_amount, upi_amount, total):
    """
    Validate a Cash&UPI allocation and order it primary first.

    Both amounts must be present and positive, and they must add up to
    the cart total exactly. The larger amount is the primary charge;
    on a tie Cash is primary.

    Returns:
        tuple: ``(primary, secondary)`` :class:`Charge` pair.

    Raises:
        InvalidSplitPaymentError: Allocation does not cover the total.
    """
    if cash_amount is None or upi_amount is None:
        raise InvalidSplitPaymentError("Enter both the cash and the UPI amount")

    cash = to_money(cash_amount)
    upi = to_money(upi_amount)
    total = to_money(total)

    if cash <= 0 or upi <= 0:
        raise InvalidSplitPaymentError("Cash and UPI amounts must both be greater than zero")

    if cash + upi != total:
        raise InvalidSplitPaymentError(
            f"Cash ({format_money(cash)}) + UPI ({format_money(upi)}) "
            f"must equal the order total {format_money(total)}"
        )

    cash_charge = Charge(TabPaymentMode.CASH.value, cash)
    upi_charge = Charge(TabPaymentMode.UPI.value, upi)
    if cash >= upi:
        return cash_charge, upi_charge
    return upi_charge, cash_charge
