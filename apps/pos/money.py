from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

CENT = Decimal('0.01')

CURRENCY_SYMBOLS = {
    'INR': '₹',
}


def to_money(value) -> Decimal:
    """Two-place Decimal from a Decimal, int or numeric string."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount) -> str:
    currency = getattr(settings, 'CAFE_CURRENCY', 'INR')
    symbol = CURRENCY_SYMBOLS.get(currency, f'{currency} ')
    return f"{symbol}{to_money(amount)}"
