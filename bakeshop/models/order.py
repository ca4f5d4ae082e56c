"""Order model."""

from datetime import datetime
import uuid
from bakeshop.extensions import db


class Order(db.Model):
    """Customer order for a single item. Immutable once placed."""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.String(50), unique=True, nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey('bakery_items.id', ondelete='SET NULL'))
    item_name = db.Column(db.String(150), nullable=False)  # Snapshot of item name
    quantity = db.Column(db.Integer, nullable=False)
    total_amount = db.Column(db.Float, nullable=False)

    # Customer contact
    customer_name = db.Column(db.String(100), nullable=False)
    customer_email = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    customer_address = db.Column(db.String(500), nullable=False)
    special_notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    item = db.relationship('BakeryItem')

    @staticmethod
    def generate_order_id():
        """Generate a unique, human readable order id."""
        timestamp = datetime.utcnow().strftime('%Y%m%d%H%M%S')
        unique_id = uuid.uuid4().hex[:4].upper()
        return f'ORDER-{timestamp}-{unique_id}'

    def __repr__(self):
        return f'<Order {self.order_id}>'
