"""Dead-letter record for order notifications."""

from datetime import datetime
from bakeshop.extensions import db


class NotificationFailure(db.Model):
    """Order webhook call that did not go through."""
    __tablename__ = 'notification_failures'

    id = db.Column(db.Integer, primary_key=True)
    order_ref = db.Column(db.String(50), nullable=False, index=True)
    payload = db.Column(db.JSON, nullable=False)
    error = db.Column(db.Text)
    attempts = db.Column(db.Integer, default=1, nullable=False)
    delivered_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_attempt_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_pending(self):
        return self.delivered_at is None

    @staticmethod
    def pending():
        return NotificationFailure.query.filter(
            NotificationFailure.delivered_at.is_(None)
        ).order_by(NotificationFailure.created_at.asc())

    def __repr__(self):
        return f'<NotificationFailure {self.order_ref} x{self.attempts}>'
