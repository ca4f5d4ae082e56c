"""Database models package."""

from .user import User
from .item import BakeryItem
from .sale import GlobalSale
from .banner import Banner, BANNER_TYPES
from .order import Order
from .setting import SiteSetting
from .signature import SignatureItem
from .notification import NotificationFailure

__all__ = [
    'User',
    'BakeryItem',
    'GlobalSale',
    'Banner',
    'BANNER_TYPES',
    'Order',
    'SiteSetting',
    'SignatureItem',
    'NotificationFailure',
]
