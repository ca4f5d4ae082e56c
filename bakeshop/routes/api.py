"""JSON API endpoints for the storefront scripts and media management."""

from flask import Blueprint, jsonify, request, current_app, g
from flask_login import login_required, current_user
from bakeshop.errors import InvalidMediaId, MediaError
from bakeshop.extensions import csrf
from bakeshop.models import BakeryItem
from bakeshop.services.banners import ordered_banners
from bakeshop.services.media import get_media_store
from bakeshop.services.pricing import price_items
from bakeshop.services.sales import get_active_sale
from bakeshop.utils.decorators import admin_required, api_admin_required

api_bp = Blueprint('api', __name__)


def _sale_dict(sale):
    return {
        'id': sale.id,
        'name': sale.name,
        'description': sale.description,
        'discount_percentage': sale.discount_percentage,
        'start_date': sale.start_date.isoformat() if sale.start_date else None,
        'end_date': sale.end_date.isoformat() if sale.end_date else None,
    }


@api_bp.route('/items')
def items():
    """Catalog with effective prices."""
    category = request.args.get('category')
    query = BakeryItem.query.order_by(BakeryItem.created_at.asc())
    all_items = query.all()
    if category:
        all_items = [item for item in all_items if item.category_slug == category]

    return jsonify({
        'items': [{
            'id': priced.item.id,
            'name': priced.item.name,
            'description': priced.item.description,
            'category': priced.item.category,
            'image_url': priced.item.image_url,
            'base_price': priced.base_price,
            'price': priced.price,
            'discount': priced.discount_label,
        } for priced in price_items(all_items, get_active_sale())],
        'currency': current_app.config['CURRENCY'],
    })


@api_bp.route('/banners')
def banners():
    """Banners in carousel order."""
    return jsonify({'banners': [banner.to_dict() for banner in ordered_banners()]})


@api_bp.route('/active-sale')
def active_sale():
    sale = get_active_sale()
    return jsonify({'sale': _sale_dict(sale) if sale else None})


@api_bp.route('/auth/token', methods=['POST'])
@login_required
@admin_required
def issue_token():
    """Bearer token for the media endpoints, signed for the logged-in admin."""
    return jsonify({
        'token': current_user.generate_api_token(),
        'expires_in': current_app.config['API_TOKEN_MAX_AGE'],
    })


@api_bp.route('/media/delete', methods=['POST'])
@csrf.exempt
@api_admin_required
def delete_media():
    """Delete a stored asset by public id."""
    data = request.get_json(silent=True) or {}
    public_id = data.get('publicId')
    if not public_id:
        return jsonify({'error': 'Missing publicId'}), 400

    resource_type = data.get('resourceType', 'image')
    if resource_type not in ('image', 'video'):
        return jsonify({'error': 'Invalid resourceType'}), 400

    try:
        result = get_media_store().destroy(public_id, resource_type=resource_type)
    except InvalidMediaId as exc:
        current_app.logger.warning('Rejected media deletion of %r by %s', public_id, g.api_user.email)
        return jsonify({'error': str(exc)}), 400
    except MediaError as exc:
        current_app.logger.error('Media deletion of %s failed: %s', public_id, exc)
        return jsonify({'error': str(exc)}), 502

    current_app.logger.info('Media %s deleted by %s', public_id, g.api_user.email)
    return jsonify({'success': True, 'result': result})
