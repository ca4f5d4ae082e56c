"""Admin panel routes."""

from datetime import datetime
from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_required
from requests import RequestException
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.errors import BannerOrderError, MediaError
from bakeshop.extensions import db
from bakeshop.forms.admin import ItemForm, GlobalSaleForm, BannerForm, LogoForm, SignatureItemForm
from bakeshop.models import (BakeryItem, GlobalSale, Banner, Order, SiteSetting,
                             SignatureItem, NotificationFailure)
from bakeshop.services import banners as banner_service
from bakeshop.services.media import get_media_store, allowed_file, remove_asset
from bakeshop.services.notifier import OrderNotifier
from bakeshop.services.orders import delete_order
from bakeshop.services.sales import get_active_sale, toggle_sale
from bakeshop.utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


def _upload_image(form, folder):
    """URL of the form's uploaded picture, or of its image URL field."""
    if not form.has_upload():
        return form.image_url.data
    upload = form.image.data
    if not allowed_file(upload.filename):
        raise MediaError('Unsupported image type')
    return get_media_store().upload(upload, folder).url


def _as_datetime(value):
    return datetime.combine(value, datetime.min.time()) if value else None


@admin_bp.route('/')
@admin_bp.route('/dashboard')
@login_required
@admin_required
def dashboard():
    """Admin dashboard with shop overview."""
    recent_orders = Order.query.order_by(Order.created_at.desc()).limit(10).all()
    failed_notifications = NotificationFailure.pending().count()

    return render_template('admin/dashboard.html',
                           total_items=BakeryItem.query.count(),
                           total_orders=Order.query.count(),
                           total_banners=Banner.query.count(),
                           active_sale=get_active_sale(),
                           recent_orders=recent_orders,
                           failed_notifications=failed_notifications)


# --- Item Management ---
@admin_bp.route('/items')
@login_required
@admin_required
def items():
    """All bakery items."""
    all_items = BakeryItem.query.order_by(BakeryItem.created_at.desc()).all()
    return render_template('admin/items.html', items=all_items)


@admin_bp.route('/items/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_item():
    """Add a bakery item."""
    form = ItemForm()
    if form.validate_on_submit():
        try:
            item = BakeryItem(
                name=form.name.data.strip(),
                price=form.price.data,
                description=form.description.data,
                category=form.category.data.strip().lower(),
                image_url=_upload_image(form, 'items')
            )
            item.set_sale(form.is_on_sale.data, form.sale_percentage.data)
            db.session.add(item)
            db.session.commit()
        except (SQLAlchemyError, MediaError):
            db.session.rollback()
            current_app.logger.exception('Adding bakery item failed')
            flash('Failed to add bakery item. Please try again.', 'danger')
            return render_template('admin/item_form.html', form=form, title='Add New Item')

        current_app.logger.info('Bakery item %s added', item.id)
        flash('New bakery item has been added successfully!', 'success')
        return redirect(url_for('admin.items'))

    return render_template('admin/item_form.html', form=form, title='Add New Item')


@admin_bp.route('/items/<int:item_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_item(item_id):
    """Edit a bakery item."""
    item = BakeryItem.query.get_or_404(item_id)
    form = ItemForm(obj=item)
    form.image_required = False

    if form.validate_on_submit():
        old_image = item.image_url
        try:
            item.name = form.name.data.strip()
            item.price = form.price.data
            item.description = form.description.data
            item.category = form.category.data.strip().lower()
            item.image_url = _upload_image(form, 'items') or old_image
            item.set_sale(form.is_on_sale.data, form.sale_percentage.data)
            db.session.commit()
        except (SQLAlchemyError, MediaError):
            db.session.rollback()
            current_app.logger.exception('Updating bakery item %s failed', item_id)
            flash('Failed to update bakery item. Please try again.', 'danger')
            return render_template('admin/item_form.html', form=form, item=item,
                                   title='Edit Item')

        if item.image_url != old_image:
            remove_asset(old_image)
        flash('Bakery item has been updated successfully!', 'success')
        return redirect(url_for('admin.items'))

    return render_template('admin/item_form.html', form=form, item=item, title='Edit Item')


@admin_bp.route('/items/<int:item_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_item(item_id):
    """Delete a bakery item. Its orders keep their item name snapshot."""
    item = BakeryItem.query.get_or_404(item_id)
    image_url = item.image_url
    try:
        Order.query.filter_by(item_id=item.id).update({'item_id': None})
        db.session.delete(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Deleting bakery item %s failed', item_id)
        flash('Failed to delete bakery item. Please try again.', 'danger')
        return redirect(url_for('admin.items'))

    remove_asset(image_url)
    flash('Bakery item has been deleted.', 'success')
    return redirect(url_for('admin.items'))


# --- Global Sales ---
@admin_bp.route('/sales')
@login_required
@admin_required
def sales():
    """Global sale events."""
    all_sales = GlobalSale.query.order_by(GlobalSale.created_at.desc()).all()
    return render_template('admin/sales.html', sales=all_sales, active_sale=get_active_sale())


@admin_bp.route('/sales/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_sale():
    """Create a global sale. New sales start inactive."""
    form = GlobalSaleForm()
    if form.validate_on_submit():
        sale = GlobalSale(
            name=form.name.data.strip(),
            description=form.description.data,
            discount_percentage=form.discount_percentage.data,
            start_date=_as_datetime(form.start_date.data),
            end_date=_as_datetime(form.end_date.data),
            is_active=False
        )
        db.session.add(sale)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Creating global sale failed')
            flash('Failed to create sale. Please try again.', 'danger')
            return render_template('admin/sale_form.html', form=form, title='Create New Sale')

        flash('Global sale event has been created successfully!', 'success')
        return redirect(url_for('admin.sales'))

    return render_template('admin/sale_form.html', form=form, title='Create New Sale')


@admin_bp.route('/sales/<int:sale_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_sale(sale_id):
    """Edit a global sale."""
    sale = GlobalSale.query.get_or_404(sale_id)
    form = GlobalSaleForm(obj=sale)

    if form.validate_on_submit():
        sale.name = form.name.data.strip()
        sale.description = form.description.data
        sale.discount_percentage = form.discount_percentage.data
        sale.start_date = _as_datetime(form.start_date.data)
        sale.end_date = _as_datetime(form.end_date.data)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Updating global sale %s failed', sale_id)
            flash('Failed to update sale. Please try again.', 'danger')
            return render_template('admin/sale_form.html', form=form, sale=sale,
                                   title='Edit Sale')

        flash('Global sale has been updated successfully!', 'success')
        return redirect(url_for('admin.sales'))

    return render_template('admin/sale_form.html', form=form, sale=sale, title='Edit Sale')


@admin_bp.route('/sales/<int:sale_id>/toggle', methods=['POST'])
@login_required
@admin_required
def toggle_sale_status(sale_id):
    """Activate (deactivating any other) or deactivate a sale."""
    sale = GlobalSale.query.get_or_404(sale_id)
    try:
        toggle_sale(sale)
    except SQLAlchemyError:
        flash('Failed to update sale. Please try again.', 'danger')
        return redirect(url_for('admin.sales'))

    status = 'active' if sale.is_active else 'inactive'
    flash(f'Sale "{sale.name}" is now {status}.', 'success')
    return redirect(url_for('admin.sales'))


@admin_bp.route('/sales/<int:sale_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_sale(sale_id):
    """Delete a global sale."""
    sale = GlobalSale.query.get_or_404(sale_id)
    db.session.delete(sale)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Deleting global sale %s failed', sale_id)
        flash('Failed to delete sale. Please try again.', 'danger')
        return redirect(url_for('admin.sales'))

    flash('Global sale has been deleted.', 'success')
    return redirect(url_for('admin.sales'))


# --- Banners ---
@admin_bp.route('/banners')
@login_required
@admin_required
def banners():
    """Banner list in display order."""
    return render_template('admin/banners.html',
                           banners=banner_service.ordered_banners(),
                           form=BannerForm())


@admin_bp.route('/banners/upload', methods=['POST'])
@login_required
@admin_required
def upload_banner():
    """Upload a banner and append it to the carousel."""
    form = BannerForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'danger')
        return redirect(url_for('admin.banners'))

    upload = form.file.data
    if not allowed_file(upload.filename, allow_video=form.banner_type.data == 'video'):
        flash('Unsupported file type for this banner.', 'danger')
        return redirect(url_for('admin.banners'))

    try:
        result = get_media_store().upload(upload, 'banners')
        banner_service.insert_banner(form.banner_type.data, result.url)
    except (MediaError, SQLAlchemyError):
        current_app.logger.exception('Banner upload failed')
        flash('Failed to upload banner. Please try again.', 'danger')
        return redirect(url_for('admin.banners'))

    flash('Banner uploaded successfully!', 'success')
    return redirect(url_for('admin.banners'))


@admin_bp.route('/banners/<int:banner_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_banner(banner_id):
    """Delete a banner and renumber the rest."""
    banner = Banner.query.get_or_404(banner_id)
    banner_url, resource_type = banner.banner_url, banner.banner_type
    try:
        banner_service.delete_banner(banner)
    except SQLAlchemyError:
        flash('Failed to delete banner. Please try again.', 'danger')
        return redirect(url_for('admin.banners'))

    remove_asset(banner_url, resource_type=resource_type)
    flash('Banner deleted successfully!', 'success')
    return redirect(url_for('admin.banners'))


@admin_bp.route('/banners/<int:banner_id>/up', methods=['POST'])
@login_required
@admin_required
def move_banner_up(banner_id):
    banner = Banner.query.get_or_404(banner_id)
    try:
        banner_service.move_up(banner)
    except SQLAlchemyError:
        flash('Failed to move banner. Please try again.', 'danger')
    return redirect(url_for('admin.banners'))


@admin_bp.route('/banners/<int:banner_id>/down', methods=['POST'])
@login_required
@admin_required
def move_banner_down(banner_id):
    banner = Banner.query.get_or_404(banner_id)
    try:
        banner_service.move_down(banner)
    except SQLAlchemyError:
        flash('Failed to move banner. Please try again.', 'danger')
    return redirect(url_for('admin.banners'))


@admin_bp.route('/banners/<int:banner_id>/move', methods=['POST'])
@login_required
@admin_required
def move_banner(banner_id):
    """Move a banner to an explicit position."""
    banner = Banner.query.get_or_404(banner_id)
    new_order = request.form.get('display_order', type=int)
    if new_order is None:
        flash('Please choose a position.', 'danger')
        return redirect(url_for('admin.banners'))
    try:
        banner_service.move_banner(banner, new_order)
    except BannerOrderError as exc:
        flash(str(exc), 'danger')
    except SQLAlchemyError:
        flash('Failed to move banner. Please try again.', 'danger')
    return redirect(url_for('admin.banners'))


# --- Logo ---
@admin_bp.route('/logo', methods=['GET', 'POST'])
@login_required
@admin_required
def logo():
    """Upload or replace the shop logo."""
    form = LogoForm()
    current_logo = SiteSetting.get_value('logo_url')

    if form.validate_on_submit():
        upload = form.file.data
        if not allowed_file(upload.filename):
            flash('Please upload an image file.', 'danger')
            return redirect(url_for('admin.logo'))
        try:
            url = get_media_store().upload(upload, 'logo').url
            SiteSetting.set_value('logo_url', url)
            db.session.commit()
        except (MediaError, SQLAlchemyError):
            db.session.rollback()
            current_app.logger.exception('Logo upload failed')
            flash('Failed to upload logo. Please try again.', 'danger')
            return redirect(url_for('admin.logo'))

        if current_logo and current_logo != url:
            remove_asset(current_logo)
        flash('Logo has been uploaded successfully!', 'success')
        return redirect(url_for('admin.logo'))

    return render_template('admin/logo.html', form=form, current_logo=current_logo)


@admin_bp.route('/logo/delete', methods=['POST'])
@login_required
@admin_required
def delete_logo():
    """Remove the shop logo."""
    setting = SiteSetting.query.filter_by(key='logo_url').first()
    if setting is None:
        flash('There is no logo to remove.', 'info')
        return redirect(url_for('admin.logo'))

    logo_url = setting.value
    db.session.delete(setting)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Deleting logo failed')
        flash('Failed to delete logo. Please try again.', 'danger')
        return redirect(url_for('admin.logo'))

    remove_asset(logo_url)
    flash('Logo has been removed successfully!', 'success')
    return redirect(url_for('admin.logo'))


# --- Signature Items ---
@admin_bp.route('/signature')
@login_required
@admin_required
def signature_items():
    """Signature showcase items."""
    all_items = SignatureItem.query.order_by(SignatureItem.display_order.asc()).all()
    return render_template('admin/signature_items.html', items=all_items)


@admin_bp.route('/signature/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_signature_item():
    form = SignatureItemForm()
    if form.validate_on_submit():
        try:
            item = SignatureItem(
                title=form.title.data.strip(),
                category=form.category.data.strip().lower(),
                display_order=form.display_order.data or 0,
                image_url=_upload_image(form, 'signature')
            )
            db.session.add(item)
            db.session.commit()
        except (SQLAlchemyError, MediaError):
            db.session.rollback()
            current_app.logger.exception('Adding signature item failed')
            flash('Failed to add item. Please try again.', 'danger')
            return render_template('admin/signature_form.html', form=form,
                                   title='Add Signature Item')

        flash('Signature item added successfully', 'success')
        return redirect(url_for('admin.signature_items'))

    return render_template('admin/signature_form.html', form=form, title='Add Signature Item')


@admin_bp.route('/signature/<int:item_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_signature_item(item_id):
    item = SignatureItem.query.get_or_404(item_id)
    form = SignatureItemForm(obj=item)
    form.image_required = False

    if form.validate_on_submit():
        old_image = item.image_url
        try:
            item.title = form.title.data.strip()
            item.category = form.category.data.strip().lower()
            item.display_order = form.display_order.data or 0
            item.image_url = _upload_image(form, 'signature') or old_image
            db.session.commit()
        except (SQLAlchemyError, MediaError):
            db.session.rollback()
            current_app.logger.exception('Updating signature item %s failed', item_id)
            flash('Failed to update item. Please try again.', 'danger')
            return render_template('admin/signature_form.html', form=form, item=item,
                                   title='Edit Signature Item')

        if item.image_url != old_image:
            remove_asset(old_image)
        flash('Signature item updated successfully', 'success')
        return redirect(url_for('admin.signature_items'))

    return render_template('admin/signature_form.html', form=form, item=item,
                           title='Edit Signature Item')


@admin_bp.route('/signature/<int:item_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_signature_item(item_id):
    item = SignatureItem.query.get_or_404(item_id)
    image_url = item.image_url
    db.session.delete(item)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Deleting signature item %s failed', item_id)
        flash('Failed to delete item. Please try again.', 'danger')
        return redirect(url_for('admin.signature_items'))

    remove_asset(image_url)
    flash('Signature item deleted successfully', 'success')
    return redirect(url_for('admin.signature_items'))


# --- Orders ---
@admin_bp.route('/orders')
@login_required
@admin_required
def orders():
    """Order history, newest first."""
    page = request.args.get('page', 1, type=int)
    pagination = Order.query.order_by(Order.created_at.desc()).paginate(
        page=page, per_page=current_app.config['ITEMS_PER_PAGE'], error_out=False
    )
    return render_template('admin/orders.html',
                           orders=pagination.items,
                           pagination=pagination)


@admin_bp.route('/orders/<int:order_pk>/delete', methods=['POST'])
@login_required
@admin_required
def remove_order(order_pk):
    order = Order.query.get_or_404(order_pk)
    try:
        delete_order(order)
    except SQLAlchemyError:
        current_app.logger.exception('Deleting order %s failed', order_pk)
        flash('Failed to delete order. Please try again.', 'danger')
        return redirect(url_for('admin.orders'))

    flash('Order deleted.', 'success')
    return redirect(url_for('admin.orders'))


@admin_bp.route('/webhook/test', methods=['POST'])
@login_required
@admin_required
def test_webhook():
    """Send sample order data to the order webhook."""
    try:
        OrderNotifier.from_config().send_test()
    except RequestException as exc:
        current_app.logger.warning('Webhook test failed: %s', exc)
        flash('Failed to send test data to webhook.', 'danger')
    else:
        flash('Test data has been sent to the order webhook.', 'success')
    return redirect(url_for('admin.dashboard'))
