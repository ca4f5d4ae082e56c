import requests

from bakeshop.models import Banner, NotificationFailure, Order
from bakeshop.services.notifier import OrderNotifier


def make_order():
    return Order(order_id='ORDER-20240101120000-CD34', item_name='Croissant', quantity=1,
                 total_amount=120.0, customer_name='Karim', customer_email='karim@mail.com',
                 customer_phone='01800000000', customer_address='Chittagong')


def test_notifications_retry_command(app, webhook):
    webhook.side_effect = requests.ConnectionError('down')
    OrderNotifier.from_config().send(make_order())
    webhook.side_effect = None

    result = app.test_cli_runner().invoke(args=['notifications', 'retry'])

    assert '1 delivered, 0 still failing' in result.output
    assert NotificationFailure.pending().count() == 0


def test_banners_normalize_command(app, db):
    for i, order in enumerate((2, 5, 9)):
        db.session.add(Banner(banner_type='image', banner_url=f'https://img.example.test/{i}.jpg',
                              display_order=order))
    db.session.commit()

    result = app.test_cli_runner().invoke(args=['banners', 'normalize'])

    assert 'normalized' in result.output
    assert sorted(b.display_order for b in Banner.query.all()) == [0, 1, 2]
