"""Global sale activation.

Only one sale is active at a time. Activation switches every other sale off
in the same transaction; if rows written outside this module still leave
several active, the most recently activated one wins.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.extensions import db
from bakeshop.models import GlobalSale

logger = logging.getLogger(__name__)


def get_active_sale():
    """The current active sale, or None."""
    return GlobalSale.query.filter_by(is_active=True).order_by(
        GlobalSale.activated_at.desc().nullslast(),
        GlobalSale.id.desc()
    ).first()


def activate_sale(sale):
    """Make ``sale`` the only active sale."""
    try:
        GlobalSale.query.filter(
            GlobalSale.id != sale.id,
            GlobalSale.is_active.is_(True)
        ).update({'is_active': False}, synchronize_session='fetch')
        sale.is_active = True
        sale.activated_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Activating sale %s failed', sale.id)
        raise
    logger.info('Global sale %s (%s%%) activated', sale.name, sale.discount_percentage)
    return sale


def deactivate_sale(sale):
    sale.is_active = False
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
    logger.info('Global sale %s deactivated', sale.name)
    return sale


def toggle_sale(sale):
    if sale.is_active:
        return deactivate_sale(sale)
    return activate_sale(sale)


def time_left(target, now=None):
    """Countdown parts until ``target``; all zero once it has passed."""
    now = now or datetime.utcnow()
    remaining = int((target - now).total_seconds())
    if remaining <= 0:
        return {'days': 0, 'hours': 0, 'minutes': 0, 'seconds': 0}
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, seconds = divmod(remaining, 60)
    return {'days': days, 'hours': hours, 'minutes': minutes, 'seconds': seconds}
