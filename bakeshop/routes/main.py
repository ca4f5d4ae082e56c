"""Main public routes."""

from datetime import datetime
from flask import Blueprint, render_template, request, current_app, send_from_directory, abort
from slugify import slugify
from bakeshop.models import BakeryItem, Banner, SignatureItem
from bakeshop.services.carousel import BannerCarousel
from bakeshop.services.pricing import price_item, price_items
from bakeshop.services.sales import get_active_sale, time_left

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Catalog with banners, active sale and signature items."""
    category = request.args.get('category', '')

    active_sale = get_active_sale()
    items = BakeryItem.query.order_by(BakeryItem.created_at.asc()).all()
    categories = [(name, slugify(name)) for name in BakeryItem.categories()]
    if category:
        items = [item for item in items if item.category_slug == category]

    carousel = BannerCarousel(
        Banner.query.all(),
        interval=current_app.config['CAROUSEL_INTERVAL'],
        transition=current_app.config['CAROUSEL_TRANSITION']
    )
    carousel.go_to(request.args.get('slide', 0, type=int))

    countdown = None
    if active_sale and active_sale.end_date and active_sale.end_date > datetime.utcnow():
        countdown = time_left(active_sale.end_date)

    signature_items = SignatureItem.query.order_by(
        SignatureItem.display_order.asc()
    ).all()

    return render_template('main/index.html',
                           priced_items=price_items(items, active_sale),
                           categories=categories,
                           current_category=category,
                           active_sale=active_sale,
                           countdown=countdown,
                           carousel=carousel,
                           signature_items=signature_items)


@main_bp.route('/item/<int:item_id>')
def item_detail(item_id):
    """Item detail page."""
    item = BakeryItem.query.get_or_404(item_id)
    return render_template('main/item_detail.html',
                           priced=price_item(item, get_active_sale()))


@main_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve files saved by the local media store."""
    if current_app.config['MEDIA_BACKEND'] != 'local':
        abort(404)
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
