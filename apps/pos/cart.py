"""
Cart of an open order tab.

A cart holds at most one line per item identifier. Adding an item that is
already in the cart bumps its quantity; a line decremented to zero is
removed, so every line always has a quantity of at least 1.

Menu items are identified by their primary key. Custom items typed in at
the till get an identifier derived from name and price, which makes
repeated adds of the same custom item merge into one line.
"""

import hashlib

from django.utils.text import slugify

from .money import to_money


def custom_item_key(name, price) -> str:
    """
    Cart identifier of a custom item, e.g. ``custom-extra-shot-1500-3f2a9c1d``.

    Names are compared stripped and case-folded. The slug is for reading
    only; the digest of the whole name keeps "Chai (large)" and
    "Chai large" apart.
    """
    name = name.strip().casefold()
    paise = int(to_money(price) * 100)
    digest = hashlib.sha1(f"{name}|{paise}".encode("utf-8")).hexdigest()[:8]
    return f"custom-{slugify(name, allow_unicode=True) or 'item'}-{paise}-{digest}"


class SellableItem:
    """What the cart needs to know about something it sells."""

    def __init__(self, identifier, name, price, category='', is_custom=False):
        self.identifier = str(identifier)
        self.name = name
        self.price = to_money(price)
        self.category = category or ''
        self.is_custom = is_custom

    @classmethod
    def from_menu_item(cls, menu_item):
        return cls(
            identifier=menu_item.id,
            name=menu_item.name,
            price=menu_item.price,
            category=menu_item.category,
        )

    @classmethod
    def custom(cls, name, price, category=''):
        name = name.strip()
        return cls(
            identifier=custom_item_key(name, price),
            name=name,
            price=price,
            category=category,
            is_custom=True,
        )

    def __repr__(self):
        return f"<SellableItem {self.identifier} {self.name} @ {self.price}>"


class CartLine:

    def __init__(self, item, quantity=1):
        if quantity < 1:
            raise ValueError("Cart line quantity must be at least 1")
        self.item = item
        self.quantity = quantity

    @property
    def identifier(self):
        return self.item.identifier

    @property
    def menu_item_id(self):
        """Menu primary key, None for custom items."""
        return None if self.item.is_custom else self.item.identifier

    @property
    def subtotal(self):
        return self.item.price * self.quantity

    def to_dict(self):
        return {
            'identifier': self.item.identifier,
            'name': self.item.name,
            'price': str(self.item.price),
            'category': self.item.category,
            'is_custom': self.item.is_custom,
            'quantity': self.quantity,
        }

    @classmethod
    def from_dict(cls, data):
        item = SellableItem(
            identifier=data['identifier'],
            name=data['name'],
            price=data['price'],
            category=data.get('category', ''),
            is_custom=data.get('is_custom', False),
        )
        return cls(item, quantity=int(data['quantity']))


class Cart:

    def __init__(self, lines=None):
        self._lines = {}
        for line in lines or []:
            self._lines[line.identifier] = line

    @property
    def lines(self):
        """Lines in the order they were first added."""
        return list(self._lines.values())

    def get(self, identifier):
        return self._lines.get(str(identifier))

    def add_line(self, item) -> CartLine:
        """Add one unit of item, merging into an existing line."""
        line = self._lines.get(item.identifier)
        if line is None:
            line = CartLine(item)
            self._lines[item.identifier] = line
        else:
            line.quantity += 1
        return line

    def increment_line(self, identifier):
        line = self._lines.get(str(identifier))
        if line is not None:
            line.quantity += 1
        return line

    def decrement_line(self, identifier):
        """
        Remove one unit. Returns the line, or None once it is gone
        (or was never there).
        """
        identifier = str(identifier)
        line = self._lines.get(identifier)
        if line is None:
            return None
        if line.quantity <= 1:
            del self._lines[identifier]
            return None
        line.quantity -= 1
        return line

    def total(self):
        return to_money(sum((line.subtotal for line in self._lines.values()), 0))

    def item_count(self):
        return sum(line.quantity for line in self._lines.values())

    def is_empty(self):
        return not self._lines

    def __len__(self):
        return len(self._lines)

    def line_items(self):
        """Line items in the shape the submission gateway takes."""
        return [
            {
                'menu_item_id': line.menu_item_id,
                'name': line.item.name,
                'quantity': line.quantity,
                'unit_price': line.item.price,
            }
            for line in self._lines.values()
        ]

    def to_list(self):
        return [line.to_dict() for line in self._lines.values()]

    @classmethod
    def from_list(cls, data):
        return cls(CartLine.from_dict(entry) for entry in data or [])
