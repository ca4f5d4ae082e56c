"""Exceptions raised by the bakeshop services."""


class BakeshopError(Exception):
    """Base class for bakeshop errors."""


class InvalidQuantity(BakeshopError, ValueError):
    """Order or cart quantity is not a positive integer."""

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f'Quantity must be at least 1 (got {quantity!r}).')


class BannerOrderError(BakeshopError, ValueError):
    """Requested banner position is outside the current range."""


class MediaError(BakeshopError):
    """Upload to or deletion from the media store failed."""


class InvalidMediaId(MediaError, ValueError):
    """Public id does not name a file inside the media store."""
