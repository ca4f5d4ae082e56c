"""Order routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.errors import InvalidQuantity
from bakeshop.forms.order import OrderForm
from bakeshop.models import BakeryItem, Order
from bakeshop.services.orders import place_order
from bakeshop.services.pricing import price_item
from bakeshop.services.sales import get_active_sale

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/<int:item_id>', methods=['GET', 'POST'])
def order_item(item_id):
    """Order form for a single item."""
    item = BakeryItem.query.get_or_404(item_id)
    priced = price_item(item, get_active_sale())
    form = OrderForm()

    if form.validate_on_submit():
        try:
            order = place_order(item, form.quantity.data, form.customer_data())
        except InvalidQuantity as exc:
            form.quantity.errors.append(str(exc))
            flash(str(exc), 'danger')
            return render_template('orders/order_form.html', form=form, priced=priced), 400
        except SQLAlchemyError:
            current_app.logger.exception('Placing order for item %s failed', item.id)
            flash('Failed to place your order. Please try again.', 'danger')
            return render_template('orders/order_form.html', form=form, priced=priced)

        flash(f'Your order for {order.quantity}x {order.item_name} has been received. '
              f'We\'ll contact you soon!', 'success')
        return redirect(url_for('orders.order_confirmation', order_id=order.order_id))

    return render_template('orders/order_form.html', form=form, priced=priced)


@orders_bp.route('/confirmation/<order_id>')
def order_confirmation(order_id):
    """Order confirmation page."""
    order = Order.query.filter_by(order_id=order_id).first_or_404()
    return render_template('orders/confirmation.html', orders=[order])
