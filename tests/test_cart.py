from collections import namedtuple

import pytest

from bakeshop.errors import InvalidQuantity
from bakeshop.services.cart import Cart, SESSION_KEY
from bakeshop.services.pricing import PricedItem

Item = namedtuple('Item', 'id name image_url')


def priced(item_id, price):
    return PricedItem(Item(item_id, f'Item {item_id}', 'x.jpg'), price, price, None)


def test_add_merges_lines_for_same_item():
    store = {}
    cart = Cart(store)
    cart.add(priced(1, 50.0), 2)
    cart.add(priced(1, 50.0))
    cart.add(priced(2, 12.5), 4)

    assert cart.count == 7
    assert cart.total == 200.0
    assert len(store[SESSION_KEY]) == 2


def test_add_keeps_price_seen_when_added():
    cart = Cart({})
    cart.add(priced(1, 40.0))
    cart.add(priced(1, 80.0))
    assert cart.lines[0]['unit_price'] == 40.0


@pytest.mark.parametrize('quantity', [0, -2, 1.5])
def test_add_rejects_bad_quantity(quantity):
    cart = Cart({})
    with pytest.raises(InvalidQuantity):
        cart.add(priced(1, 10.0), quantity)
    assert cart.is_empty()


def test_decrement_to_zero_removes_line():
    cart = Cart({})
    cart.add(priced(1, 10.0), 2)
    cart.decrement(1)
    assert cart.count == 1
    cart.decrement(1)
    assert cart.is_empty()


def test_update_remove_and_clear():
    cart = Cart({})
    cart.add(priced(1, 10.0))
    cart.add(priced(2, 20.0))

    cart.update(1, 5)
    assert cart.total == 70.0
    cart.remove(2)
    assert [line['item_id'] for line in cart.lines] == [1]
    cart.clear()
    assert cart.is_empty()
