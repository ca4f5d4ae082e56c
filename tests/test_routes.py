import io

from bakeshop.models import Banner, BakeryItem, GlobalSale, Order, SiteSetting


def order_form(quantity):
    return {
        'quantity': str(quantity),
        'customer_name': 'Rahim Uddin',
        'customer_email': 'Rahim@Mail.com',
        'customer_phone': '01700000000',
        'customer_address': 'House 5, Road 2, Dhaka',
        'special_notes': '',
    }


def test_catalog_shows_effective_prices(client, make_item, make_sale):
    make_item(name='Truffle Cake', price=1000, sale_percentage=25)
    make_item(name='Sourdough', price=500, category='breads')
    make_sale(name='Eid Sale', discount_percentage=20, is_active=True)

    html = client.get('/').get_data(as_text=True)

    assert 'BDT 750.00' in html
    assert 'BDT 400.00' in html
    assert '25% OFF' in html
    assert 'Eid Sale - 20% OFF' in html


def test_catalog_filters_by_category(client, make_item):
    make_item(name='Truffle Cake', category='cakes')
    make_item(name='Sourdough', category='Artisan Breads')

    html = client.get('/?category=artisan-breads').get_data(as_text=True)

    assert 'Sourdough' in html
    assert 'Truffle Cake' not in html


def test_catalog_carousel_timing_and_start_slide(app, client, make_banners):
    make_banners(3)
    app.config['CAROUSEL_INTERVAL'] = 7
    app.config['CAROUSEL_TRANSITION'] = 0.8

    html = client.get('/?slide=2').get_data(as_text=True)

    assert 'data-bs-interval="7000"' in html
    assert 'transition-duration: 0.8s' in html
    assert '<div class="carousel-item active"' in html
    assert html.index('carousel-item active') > html.index('b1.jpg')
    assert 'href="/?slide=1"' in html
    assert 'href="/?slide=0"' in html


def test_catalog_ignores_unknown_start_slide(client, make_banners):
    make_banners(2)
    html = client.get('/?slide=9').get_data(as_text=True)
    assert html.index('carousel-item active') < html.index('b0.jpg')


def test_item_detail_404(client):
    assert client.get('/item/999').status_code == 404


def test_order_with_zero_quantity_is_rejected(client, make_item, webhook):
    item = make_item()

    response = client.post(f'/order/{item.id}', data=order_form(0))

    assert response.status_code == 400
    assert 'Quantity must be at least 1' in response.get_data(as_text=True)
    assert Order.query.count() == 0
    webhook.assert_not_called()


def test_order_is_placed_and_confirmed(client, make_item, webhook):
    item = make_item(price=120)

    response = client.post(f'/order/{item.id}', data=order_form(3), follow_redirects=True)

    assert response.status_code == 200
    order = Order.query.one()
    assert order.total_amount == 360.0
    assert order.customer_email == 'rahim@mail.com'
    assert order.special_notes is None
    assert order.order_id in response.get_data(as_text=True)
    webhook.assert_called_once()


def test_cart_add_and_checkout(client, make_item):
    cake = make_item(name='Cake', price=100)

    response = client.post('/cart/add', data={'item_id': str(cake.id), 'quantity': '2'},
                           headers={'X-Requested-With': 'XMLHttpRequest'})
    assert response.get_json() == {'success': True, 'cart_count': 2}

    data = order_form(1)
    del data['quantity']
    response = client.post('/cart/checkout', data=data)

    assert response.status_code == 200
    assert Order.query.one().total_amount == 200.0
    with client.session_transaction() as session:
        assert session['cart'] == []


def test_cart_add_rejects_zero(client, make_item):
    cake = make_item()
    response = client.post('/cart/add', data={'item_id': str(cake.id), 'quantity': '0'},
                           headers={'X-Requested-With': 'XMLHttpRequest'})
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_cart_decrement_takes_one_off_then_removes(client, make_item):
    cake = make_item(name='Cake', price=100)
    xhr = {'X-Requested-With': 'XMLHttpRequest'}
    client.post('/cart/add', data={'item_id': str(cake.id), 'quantity': '2'}, headers=xhr)

    response = client.post(f'/cart/decrement/{cake.id}', headers=xhr)
    assert response.get_json() == {'success': True, 'cart_count': 1, 'cart_total': 100.0}

    response = client.post(f'/cart/decrement/{cake.id}')
    assert response.status_code == 302
    with client.session_transaction() as session:
        assert session['cart'] == []


def test_cart_page_offers_one_less_control(client, make_item):
    cake = make_item(name='Cake', price=100)
    client.post('/cart/add', data={'item_id': str(cake.id), 'quantity': '1'})
    html = client.get('/cart/').get_data(as_text=True)
    assert f'/cart/decrement/{cake.id}' in html


def test_admin_requires_login(client):
    response = client.get('/admin/')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_admin_forbidden_for_staff(client, staff_user):
    client.post('/login', data={'email': staff_user.email, 'password': 'secret123'})
    assert client.get('/admin/').status_code == 403


def test_admin_dashboard(admin_client):
    assert admin_client.get('/admin/').status_code == 200


def test_admin_creates_item_with_upload(admin_client):
    response = admin_client.post('/admin/items/add', data={
        'name': 'Lemon Tart',
        'price': '250',
        'category': 'Tarts',
        'is_on_sale': 'y',
        'sale_percentage': '10',
        'image': (io.BytesIO(b'fake image'), 'tart.png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 302
    item = BakeryItem.query.one()
    assert item.category == 'tarts'
    assert item.sale_percentage == 10
    assert item.image_url.startswith('/uploads/items/')


def test_admin_item_needs_an_image(admin_client):
    admin_client.post('/admin/items/add', data={'name': 'Tart', 'price': '250', 'category': 'tarts'})
    assert BakeryItem.query.count() == 0


def test_admin_item_on_sale_needs_percentage(admin_client):
    admin_client.post('/admin/items/add', data={
        'name': 'Tart', 'price': '250', 'category': 'tarts', 'is_on_sale': 'y',
        'image_url': 'https://img.example.test/tart.jpg'})
    assert BakeryItem.query.count() == 0


def test_admin_delete_item_keeps_orders(admin_client, make_item, customer):
    from bakeshop.services.orders import place_order
    item = make_item()
    order = place_order(item, 1, customer)

    admin_client.post(f'/admin/items/{item.id}/delete')

    assert BakeryItem.query.count() == 0
    kept = Order.query.filter_by(order_id=order.order_id).one()
    assert kept.item_id is None
    assert kept.item_name == 'Chocolate Cake'


def test_admin_toggle_sale_keeps_one_active(admin_client, make_sale):
    first = make_sale('First', is_active=False)
    second = make_sale('Second')
    admin_client.post(f'/admin/sales/{first.id}/toggle')
    admin_client.post(f'/admin/sales/{second.id}/toggle')

    assert [s.name for s in GlobalSale.query.filter_by(is_active=True)] == ['Second']


def test_admin_banner_upload_delete_and_move(admin_client, make_banners):
    make_banners(2)
    admin_client.post('/admin/banners/upload', data={
        'banner_type': 'video',
        'file': (io.BytesIO(b'fake video'), 'promo.mp4'),
    }, content_type='multipart/form-data')

    video = Banner.query.filter_by(banner_type='video').one()
    assert video.display_order == 2

    admin_client.post(f'/admin/banners/{video.id}/move', data={'display_order': '0'})
    assert video.display_order == 0

    admin_client.post(f'/admin/banners/{video.id}/delete')
    assert sorted(b.display_order for b in Banner.query.all()) == [0, 1]


def test_admin_rejects_video_as_image_banner(admin_client):
    admin_client.post('/admin/banners/upload', data={
        'banner_type': 'image',
        'file': (io.BytesIO(b'fake video'), 'promo.mp4'),
    }, content_type='multipart/form-data')
    assert Banner.query.count() == 0


def test_admin_logo_upload_and_delete(admin_client):
    admin_client.post('/admin/logo', data={'file': (io.BytesIO(b'logo'), 'logo.png')},
                      content_type='multipart/form-data')
    logo_url = SiteSetting.get_value('logo_url')
    assert logo_url.startswith('/uploads/logo/')
    assert logo_url in admin_client.get('/').get_data(as_text=True)

    admin_client.post('/admin/logo/delete')
    assert SiteSetting.get_value('logo_url') is None


def test_admin_webhook_test_button(admin_client, webhook):
    admin_client.post('/admin/webhook/test')
    assert webhook.call_args.kwargs['json']['test'] is True


def test_api_banners_sorted(client, make_banners):
    make_banners(3)
    data = client.get('/api/banners').get_json()
    assert [b['display_order'] for b in data['banners']] == [0, 1, 2]


def test_api_items_and_active_sale(client, make_item, make_sale):
    make_item(price=500)
    make_sale(discount_percentage=20, is_active=True)

    items = client.get('/api/items').get_json()
    assert items['items'][0]['price'] == 400.0
    assert items['currency'] == 'BDT'
    assert client.get('/api/active-sale').get_json()['sale']['discount_percentage'] == 20


def test_media_delete_requires_header(client):
    response = client.post('/api/media/delete', json={'publicId': 'items/x'})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Missing authorization header'}


def test_media_delete_rejects_bad_token(client):
    response = client.post('/api/media/delete', json={'publicId': 'items/x'},
                           headers={'Authorization': 'Bearer nonsense'})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Unauthorized'}


def test_media_delete_rejects_non_admin(client, staff_user):
    token = staff_user.generate_api_token()
    response = client.post('/api/media/delete', json={'publicId': 'items/x'},
                           headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 403
    assert response.get_json() == {'error': 'Admin access required'}


def test_media_delete_requires_public_id(client, admin_user):
    token = admin_user.generate_api_token()
    response = client.post('/api/media/delete', json={},
                           headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Missing publicId'}


def test_media_delete_with_issued_token(admin_client):
    token = admin_client.post('/api/auth/token').get_json()['token']
    response = admin_client.post('/api/media/delete', json={'publicId': 'items/missing.png'},
                                 headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'result': {'result': 'not found'}}
