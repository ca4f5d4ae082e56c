"""Session-backed shopping cart."""

from flask import session
from bakeshop.errors import InvalidQuantity

SESSION_KEY = 'cart'


class Cart:
    """Cart lines kept in a mapping (the Flask session in requests).

    Each line stores the unit price the customer saw when adding the item.
    """

    def __init__(self, store):
        self._store = store

    @classmethod
    def from_session(cls):
        return cls(session)

    @property
    def lines(self):
        return list(self._store.get(SESSION_KEY, []))

    def _save(self, lines):
        self._store[SESSION_KEY] = lines
        if hasattr(self._store, 'modified'):
            self._store.modified = True

    @property
    def count(self):
        return sum(line['quantity'] for line in self.lines)

    @property
    def total(self):
        return round(sum(line['unit_price'] * line['quantity'] for line in self.lines), 2)

    def is_empty(self):
        return not self.lines

    def add(self, priced, quantity=1):
        """Add a priced item (see services.pricing.price_item)."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity(quantity)
        item = priced.item
        lines = self.lines
        for line in lines:
            if line['item_id'] == item.id:
                line['quantity'] += quantity
                break
        else:
            lines.append({
                'item_id': item.id,
                'name': item.name,
                'unit_price': priced.price,
                'image_url': item.image_url,
                'quantity': quantity,
            })
        self._save(lines)

    def update(self, item_id, quantity):
        """Set a line's quantity; zero or less removes the line."""
        lines = self.lines
        if quantity <= 0:
            lines = [line for line in lines if line['item_id'] != item_id]
        else:
            for line in lines:
                if line['item_id'] == item_id:
                    line['quantity'] = quantity
        self._save(lines)

    def decrement(self, item_id):
        for line in self.lines:
            if line['item_id'] == item_id:
                self.update(item_id, line['quantity'] - 1)
                return

    def remove(self, item_id):
        self.update(item_id, 0)

    def clear(self):
        self._save([])
