"""Cart routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.errors import InvalidQuantity
from bakeshop.forms.order import CustomerForm
from bakeshop.models import BakeryItem
from bakeshop.services.cart import Cart
from bakeshop.services.orders import place_cart_orders
from bakeshop.services.pricing import price_item
from bakeshop.services.sales import get_active_sale

cart_bp = Blueprint('cart', __name__)


def _wants_json():
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    cart = Cart.from_session()
    return render_template('cart/view.html', lines=cart.lines, cart_total=cart.total)


@cart_bp.route('/add', methods=['POST'])
def add_to_cart():
    """Add item to cart at its current sale-adjusted price."""
    item_id = request.form.get('item_id', type=int)
    quantity = request.form.get('quantity', 1, type=int)

    item = BakeryItem.query.get_or_404(item_id)
    cart = Cart.from_session()
    try:
        cart.add(price_item(item, get_active_sale()), quantity)
    except InvalidQuantity as exc:
        if _wants_json():
            return jsonify({'success': False, 'message': str(exc)}), 400
        flash(str(exc), 'danger')
        return redirect(request.referrer or url_for('main.index'))

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count})

    flash(f'{item.name} has been added to your cart!', 'success')
    return redirect(request.referrer or url_for('main.index'))


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart line quantity; zero removes the line."""
    item_id = request.form.get('item_id', type=int)
    quantity = request.form.get('quantity', type=int)
    if item_id is None or quantity is None:
        flash('Invalid cart update.', 'danger')
        return redirect(url_for('cart.view_cart'))

    cart = Cart.from_session()
    cart.update(item_id, quantity)
    message = 'Item removed from cart.' if quantity <= 0 else 'Cart updated.'

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count,
                        'cart_total': cart.total, 'message': message})

    flash(message, 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/decrement/<int:item_id>', methods=['POST'])
def decrement_item(item_id):
    """Take one off a line; the last one removes it."""
    cart = Cart.from_session()
    cart.decrement(item_id)

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count, 'cart_total': cart.total})

    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/remove/<int:item_id>', methods=['POST'])
def remove_from_cart(item_id):
    """Remove item from cart."""
    cart = Cart.from_session()
    cart.remove(item_id)

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count})

    flash('Item removed from cart.', 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    Cart.from_session().clear()
    flash('Cart cleared.', 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/checkout', methods=['GET', 'POST'])
def checkout():
    """Place one order per cart line."""
    cart = Cart.from_session()
    if cart.is_empty():
        flash('Your cart is empty.', 'warning')
        return redirect(url_for('cart.view_cart'))

    form = CustomerForm()
    if form.validate_on_submit():
        try:
            orders = place_cart_orders(cart, form.customer_data())
        except InvalidQuantity as exc:
            flash(str(exc), 'danger')
            return redirect(url_for('cart.view_cart'))
        except SQLAlchemyError:
            current_app.logger.exception('Cart checkout failed')
            flash('Failed to place your order. Please try again.', 'danger')
            return render_template('cart/checkout.html', form=form,
                                   lines=cart.lines, cart_total=cart.total)

        if not orders:
            cart.clear()
            flash('The items in your cart are no longer available.', 'warning')
            return redirect(url_for('main.index'))

        cart.clear()
        flash('Order placed successfully! We will contact you soon.', 'success')
        return render_template('orders/confirmation.html', orders=orders)

    return render_template('cart/checkout.html', form=form,
                           lines=cart.lines, cart_total=cart.total)
