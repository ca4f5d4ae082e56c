"""Global sale model."""

from datetime import datetime
from bakeshop.extensions import db


class GlobalSale(db.Model):
    """Site-wide discount event."""
    __tablename__ = 'global_sales'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    discount_percentage = db.Column(db.Integer, nullable=False)  # 1-100
    is_active = db.Column(db.Boolean, default=False, nullable=False, index=True)
    # Advisory only, never enforced when pricing
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    activated_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<GlobalSale {self.name} {self.discount_percentage}%>'
