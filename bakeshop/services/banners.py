"""Banner display order maintenance.

Between admin operations the banners' display_order values are exactly
0..N-1. Each operation writes all of its rows in one transaction and rolls
every row back if any write fails.
"""

import logging
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from bakeshop.errors import BannerOrderError
from bakeshop.extensions import db
from bakeshop.models import Banner, BANNER_TYPES

logger = logging.getLogger(__name__)


def ordered_banners():
    return Banner.query.order_by(Banner.display_order.asc(), Banner.id.asc()).all()


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Banner reordering rolled back')
        raise


def _renumber():
    for position, banner in enumerate(ordered_banners()):
        if banner.display_order != position:
            banner.display_order = position


def insert_banner(banner_type, banner_url):
    """Append a banner after the current last one."""
    if banner_type not in BANNER_TYPES:
        raise ValueError(f'Unknown banner type: {banner_type}')
    highest = db.session.query(func.max(Banner.display_order)).scalar()
    banner = Banner(
        banner_type=banner_type,
        banner_url=banner_url,
        display_order=0 if highest is None else highest + 1
    )
    db.session.add(banner)
    _commit()
    logger.info('Banner %s added at position %s', banner.id, banner.display_order)
    return banner


def delete_banner(banner):
    """Remove a banner and close the gap it leaves."""
    banner_id = banner.id
    db.session.delete(banner)
    try:
        db.session.flush()
    except SQLAlchemyError:
        db.session.rollback()
        raise
    _renumber()
    _commit()
    logger.info('Banner %s deleted', banner_id)


def move_banner(banner, new_order):
    """Move ``banner`` to ``new_order``, shifting the banners in between."""
    count = Banner.query.count()
    if not 0 <= new_order < count:
        raise BannerOrderError(f'Position {new_order} is outside 0..{count - 1}.')

    old_order = banner.display_order
    if new_order == old_order:
        return banner

    others = Banner.query.filter(Banner.id != banner.id)
    if new_order < old_order:
        shifted = others.filter(Banner.display_order >= new_order,
                                Banner.display_order < old_order)
        step = 1
    else:
        shifted = others.filter(Banner.display_order > old_order,
                                Banner.display_order <= new_order)
        step = -1
    for other in shifted.all():
        other.display_order += step
    banner.display_order = new_order
    _commit()
    logger.info('Banner %s moved from %s to %s', banner.id, old_order, new_order)
    return banner


def move_up(banner):
    """Swap towards the front. Returns False at the first position."""
    if banner.display_order == 0:
        return False
    move_banner(banner, banner.display_order - 1)
    return True


def move_down(banner):
    """Swap towards the back. Returns False at the last position."""
    if banner.display_order >= Banner.query.count() - 1:
        return False
    move_banner(banner, banner.display_order + 1)
    return True


def normalize_banner_order():
    """Re-enumerate all banners to 0..N-1, keeping their relative order."""
    _renumber()
    _commit()
