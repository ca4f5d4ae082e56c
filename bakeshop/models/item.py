"""Bakery item model."""

from datetime import datetime
from slugify import slugify
from bakeshop.extensions import db


class BakeryItem(db.Model):
    """Catalog item."""
    __tablename__ = 'bakery_items'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    price = db.Column(db.Float, nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500), nullable=False)
    category = db.Column(db.String(100), nullable=False, default='cakes')
    is_on_sale = db.Column(db.Boolean, default=False, nullable=False)
    sale_percentage = db.Column(db.Integer)  # 1-99, only while on sale
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def category_slug(self):
        return slugify(self.category or '')

    def set_sale(self, is_on_sale, sale_percentage=None):
        """Turn the individual sale on or off.

        The percentage is kept only while the item is on sale.
        """
        if is_on_sale:
            if sale_percentage is None or not 0 < sale_percentage < 100:
                raise ValueError('Sale percentage must be between 1 and 99.')
            self.is_on_sale = True
            self.sale_percentage = int(sale_percentage)
        else:
            self.is_on_sale = False
            self.sale_percentage = None

    @staticmethod
    def categories():
        """Distinct categories in catalog order."""
        rows = db.session.query(BakeryItem.category).distinct().order_by(BakeryItem.category).all()
        return [row[0] for row in rows]

    def __repr__(self):
        return f'<BakeryItem {self.name}>'
