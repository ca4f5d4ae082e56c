from datetime import datetime, timedelta

from bakeshop.models import GlobalSale
from bakeshop.services.sales import get_active_sale, activate_sale, deactivate_sale, toggle_sale, time_left


def test_new_sales_start_inactive(make_sale):
    make_sale()
    assert get_active_sale() is None


def test_activation_deactivates_every_other_sale(make_sale):
    first = make_sale('First', 10)
    second = make_sale('Second', 20)

    activate_sale(first)
    activate_sale(second)

    assert GlobalSale.query.filter_by(is_active=True).count() == 1
    assert get_active_sale().name == 'Second'


def test_most_recently_activated_wins_when_several_are_flagged(db, make_sale):
    older = make_sale('Older', 10, is_active=True)
    newer = make_sale('Newer', 30, is_active=True)
    older.activated_at = datetime.utcnow()
    newer.activated_at = datetime.utcnow() - timedelta(hours=1)
    db.session.commit()

    assert get_active_sale().name == 'Older'


def test_toggle_switches_state(make_sale):
    sale = make_sale()
    toggle_sale(sale)
    assert sale.is_active
    toggle_sale(sale)
    assert not sale.is_active
    assert get_active_sale() is None


def test_deleting_the_active_sale_leaves_none(db, make_sale):
    sale = activate_sale(make_sale())
    db.session.delete(sale)
    db.session.commit()
    assert get_active_sale() is None


def test_deactivate(make_sale):
    sale = make_sale(is_active=True)
    deactivate_sale(sale)
    assert get_active_sale() is None


def test_time_left_breaks_down_remaining_time():
    now = datetime(2024, 1, 1, 12, 0, 0)
    target = now + timedelta(days=2, hours=3, minutes=4, seconds=5)
    assert time_left(target, now) == {'days': 2, 'hours': 3, 'minutes': 4, 'seconds': 5}


def test_time_left_is_zero_once_past():
    now = datetime(2024, 1, 1)
    assert time_left(now - timedelta(seconds=1), now) == {
        'days': 0, 'hours': 0, 'minutes': 0, 'seconds': 0}
