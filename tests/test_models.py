import re

import pytest
from itsdangerous import URLSafeTimedSerializer

from bakeshop.models import BakeryItem, Order, SiteSetting, User


def test_item_sale_percentage_only_while_on_sale():
    item = BakeryItem(name='Bun', price=10, image_url='x.jpg')
    item.set_sale(True, 30)
    assert (item.is_on_sale, item.sale_percentage) == (True, 30)
    item.set_sale(False, 30)
    assert (item.is_on_sale, item.sale_percentage) == (False, None)


@pytest.mark.parametrize('percentage', [None, 0, 100, 150])
def test_item_sale_percentage_range(percentage):
    with pytest.raises(ValueError):
        BakeryItem(name='Bun', price=10, image_url='x.jpg').set_sale(True, percentage)


def test_category_slug():
    assert BakeryItem(category='Birthday Cakes').category_slug == 'birthday-cakes'


def test_order_id_format():
    assert re.fullmatch(r'ORDER-\d{14}-[0-9A-F]{4}', Order.generate_order_id())


def test_site_setting_upsert(db):
    SiteSetting.set_value('logo_url', '/uploads/logo/a.png')
    SiteSetting.set_value('logo_url', '/uploads/logo/b.png')
    db.session.commit()
    assert SiteSetting.query.count() == 1
    assert SiteSetting.get_value('logo_url') == '/uploads/logo/b.png'
    assert SiteSetting.get_value('missing', 'fallback') == 'fallback'


def test_password_hashing(admin_user):
    assert admin_user.check_password('secret123')
    assert not admin_user.check_password('wrong')


def test_api_token_round_trip(app, admin_user, db):
    token = admin_user.generate_api_token()
    assert User.verify_api_token(token) == admin_user

    admin_user.is_active = False
    db.session.commit()
    assert User.verify_api_token(token) is None


def test_api_token_signed_with_other_salt_is_rejected(app, admin_user):
    forged = URLSafeTimedSerializer(app.config['SECRET_KEY'], salt='other').dumps(
        {'user_id': admin_user.id})
    assert User.verify_api_token(forged) is None
