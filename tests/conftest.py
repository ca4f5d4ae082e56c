from unittest import mock

import pytest

from bakeshop import create_app
from bakeshop.extensions import db as _db
from bakeshop.models import User, BakeryItem, GlobalSale, Banner


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def webhook():
    """Outbound order webhook; answers 200 unless a test says otherwise."""
    with mock.patch('bakeshop.services.notifier.requests.post') as post:
        post.return_value.status_code = 200
        post.return_value.raise_for_status.return_value = None
        yield post


@pytest.fixture
def admin_user(db):
    user = User(email='admin@bakeshop.com', name='Admin', role='admin')
    user.set_password('secret123')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def staff_user(db):
    user = User(email='staff@bakeshop.com', name='Staff', role='staff')
    user.set_password('secret123')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_client(client, admin_user):
    client.post('/login', data={'email': admin_user.email, 'password': 'secret123'})
    return client


@pytest.fixture
def make_item(db):
    def make(name='Chocolate Cake', price=100.0, category='cakes', sale_percentage=None):
        item = BakeryItem(name=name, price=price, category=category,
                          image_url=f'https://img.example.test/{name}.jpg')
        item.set_sale(sale_percentage is not None, sale_percentage)
        db.session.add(item)
        db.session.commit()
        return item
    return make


@pytest.fixture
def make_sale(db):
    def make(name='Eid Sale', discount_percentage=20, is_active=False):
        sale = GlobalSale(name=name, discount_percentage=discount_percentage,
                          is_active=is_active)
        db.session.add(sale)
        db.session.commit()
        return sale
    return make


@pytest.fixture
def make_banners(db):
    def make(count):
        banners = [Banner(banner_type='image', banner_url=f'https://img.example.test/b{i}.jpg',
                          display_order=i) for i in range(count)]
        db.session.add_all(banners)
        db.session.commit()
        return banners
    return make


@pytest.fixture
def customer():
    return {
        'customer_name': 'Rahim Uddin',
        'customer_email': 'rahim@mail.com',
        'customer_phone': '01700000000',
        'customer_address': 'House 5, Road 2, Dhaka',
        'special_notes': None,
    }
