"""Order totals and order placement."""

import logging
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.errors import InvalidQuantity
from bakeshop.extensions import db
from bakeshop.models import Order, BakeryItem
from .pricing import effective_price
from .sales import get_active_sale
from .notifier import notify_order

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = ('customer_name', 'customer_email', 'customer_phone',
                   'customer_address', 'special_notes')


def check_quantity(quantity):
    """Reject anything that is not a positive integer. Never clamps."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity(quantity)
    return quantity


def order_total(unit_price, quantity):
    """Charge for ``quantity`` units, rounded to 2 decimal places."""
    check_quantity(quantity)
    return round(unit_price * quantity, 2)


def _build_order(item, quantity, customer, active_sale):
    total = order_total(effective_price(item, active_sale), quantity)
    return Order(
        order_id=Order.generate_order_id(),
        item_id=item.id,
        item_name=item.name,
        quantity=quantity,
        total_amount=total,
        **{field: customer.get(field) for field in CUSTOMER_FIELDS}
    )


def place_order(item, quantity, customer):
    """Persist an order for one item and notify the shop.

    ``customer`` maps the customer_* fields and special_notes. The quantity
    is validated before anything is written or sent.
    """
    check_quantity(quantity)
    order = _build_order(item, quantity, customer, get_active_sale())
    db.session.add(order)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Saving order for item %s failed', item.id)
        raise

    logger.info('Order %s placed: %s x %s = %.2f',
                order.order_id, order.quantity, order.item_name, order.total_amount)
    notify_order(order)
    return order


def place_cart_orders(cart, customer):
    """Place one order per cart line in a single transaction.

    Totals are recomputed from the current catalog, not from the cart's
    add-time prices. Lines whose item no longer exists are skipped.
    """
    lines = cart.lines
    for line in lines:
        check_quantity(line['quantity'])

    active_sale = get_active_sale()
    orders = []
    for line in lines:
        item = db.session.get(BakeryItem, line['item_id'])
        if item is None:
            logger.warning('Cart item %s no longer exists, skipping', line['item_id'])
            continue
        orders.append(_build_order(item, line['quantity'], customer, active_sale))

    if not orders:
        return orders

    db.session.add_all(orders)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Saving cart orders failed')
        raise

    for order in orders:
        notify_order(order)
    return orders


def delete_order(order):
    order_id = order.order_id
    db.session.delete(order)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
    logger.info('Order %s deleted', order_id)
