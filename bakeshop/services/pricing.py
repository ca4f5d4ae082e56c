"""Discount resolution for catalog items.

An item carries at most one discount. Its own sale always wins; the active
global sale only applies to items that are not individually on sale. The two
are never stacked.
"""

from collections import namedtuple

PricedItem = namedtuple('PricedItem', ['item', 'base_price', 'price', 'discount_label'])


def _item_discount(item):
    if item.is_on_sale and item.sale_percentage:
        return item.sale_percentage
    return None


def _sale_discount(active_sale):
    if active_sale is not None and (active_sale.discount_percentage or 0) > 0:
        return active_sale.discount_percentage
    return None


def effective_price(item, active_sale=None):
    """Price of ``item`` after applying at most one discount.

    Plain float arithmetic; callers round for display and for stored totals.
    """
    percentage = _item_discount(item)
    if percentage is None:
        percentage = _sale_discount(active_sale)
    if percentage is None:
        return item.price
    return item.price * (1 - percentage / 100)


def discount_label(item, active_sale=None):
    """Badge text for the discount that effective_price applied, if any."""
    percentage = _item_discount(item)
    if percentage is not None:
        return f'{percentage}% OFF'
    percentage = _sale_discount(active_sale)
    if percentage is not None:
        return f'{active_sale.name} - {percentage}% OFF'
    return None


def price_item(item, active_sale=None):
    """Bundle an item with its rounded effective price and badge."""
    return PricedItem(
        item=item,
        base_price=item.price,
        price=round(effective_price(item, active_sale), 2),
        discount_label=discount_label(item, active_sale),
    )


def price_items(items, active_sale=None):
    return [price_item(item, active_sale) for item in items]
