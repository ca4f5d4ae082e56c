"""Signature item model."""

from datetime import datetime
from bakeshop.extensions import db


class SignatureItem(db.Model):
    """Showcase picture on the homepage, ordered by display_order."""
    __tablename__ = 'signature_items'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)
    image_url = db.Column(db.String(500), nullable=False)
    category = db.Column(db.String(100), nullable=False, default='cakes')
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<SignatureItem {self.title}>'
