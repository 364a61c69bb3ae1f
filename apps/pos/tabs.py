import copy

from .cart import Cart
from .money import to_money
from .payments import TabPaymentMode


class OrderTab:
    """
    An open order being built at the till ("Order 3").

    Starts with an empty cart and Cash payment. Split amounts are only
    looked at when the tab is submitted in Cash&UPI mode; they are kept
    when switching to another mode.
    """

    def __init__(self, tab_id, name, cart=None, payment_mode=TabPaymentMode.CASH,
                 cash_amount=None, upi_amount=None):
        self.id = tab_id
        self.name = name
        self.cart = cart if cart is not None else Cart()
        self.payment_mode = TabPaymentMode(payment_mode)
        self.cash_amount = cash_amount
        self.upi_amount = upi_amount

    @property
    def is_split(self):
        return self.payment_mode == TabPaymentMode.SPLIT

    def set_payment_mode(self, mode):
        self.payment_mode = TabPaymentMode(mode)

    def set_split_amounts(self, cash_amount, upi_amount):
        """Record the Cash&UPI allocation. Checked only on submission."""
        self.cash_amount = None if cash_amount is None else to_money(cash_amount)
        self.upi_amount = None if upi_amount is None else to_money(upi_amount)

    def snapshot(self):
        """Independent copy, unaffected by later edits to this tab."""
        return copy.deepcopy(self)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'payment_mode': self.payment_mode.value,
            'cash_amount': None if self.cash_amount is None else str(self.cash_amount),
            'upi_amount': None if self.upi_amount is None else str(self.upi_amount),
            'lines': self.cart.to_list(),
        }

    @classmethod
    def from_dict(cls, data):
        tab = cls(
            tab_id=int(data['id']),
            name=data['name'],
            cart=Cart.from_list(data.get('lines')),
            payment_mode=data.get('payment_mode', TabPaymentMode.CASH),
        )
        tab.set_split_amounts(data.get('cash_amount'), data.get('upi_amount'))
        return tab

    def __repr__(self):
        return f"<OrderTab {self.id} {self.name!r} {self.payment_mode} {len(self.cart)} lines>"
