"""Outbound order webhook.

Placing an order never depends on this call. Failed deliveries are logged
and written to the notification_failures table, from which
``flask notifications retry`` replays them.
"""

import logging
from datetime import datetime

import requests
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from bakeshop.extensions import db
from bakeshop.models import NotificationFailure

logger = logging.getLogger(__name__)


def order_payload(order, currency='BDT'):
    return {
        'order_id': order.order_id,
        'item_name': order.item_name,
        'quantity': order.quantity,
        'total_amount': order.total_amount,
        'customer_name': order.customer_name,
        'customer_email': order.customer_email,
        'customer_phone': order.customer_phone,
        'customer_address': order.customer_address,
        'special_notes': order.special_notes or '',
        'order_date': (order.created_at or datetime.utcnow()).isoformat(),
        'currency': currency,
    }


def sample_payload(currency='BDT'):
    """Payload for the admin "test webhook" button."""
    return {
        'order_id': f"TEST-{datetime.utcnow().strftime('%Y%m%d%H%M%S')}",
        'item_name': 'Test Chocolate Cake',
        'quantity': 1,
        'total_amount': 850,
        'customer_name': 'Test Customer',
        'customer_email': 'test@example.com',
        'customer_phone': '01234567890',
        'customer_address': 'Test Address, Dhaka',
        'special_notes': 'This is a test order',
        'order_date': datetime.utcnow().isoformat(),
        'currency': currency,
        'test': True,
    }


class OrderNotifier:
    """Posts order JSON to a webhook URL."""

    def __init__(self, webhook_url, timeout=10, currency='BDT', http=None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.currency = currency
        self.http = http or requests

    @classmethod
    def from_config(cls):
        cfg = current_app.config
        return cls(cfg.get('ORDER_WEBHOOK_URL'), cfg['ORDER_WEBHOOK_TIMEOUT'], cfg['CURRENCY'])

    @property
    def enabled(self):
        return bool(self.webhook_url)

    def post(self, payload):
        """Send one payload. Raises requests.RequestException on failure."""
        response = self.http.post(self.webhook_url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response

    def send(self, order):
        """Deliver an order notification; returns False if it was dead-lettered."""
        if not self.enabled:
            logger.info('No order webhook configured, skipping %s', order.order_id)
            return False
        payload = order_payload(order, self.currency)
        try:
            self.post(payload)
        except requests.RequestException as exc:
            logger.warning('Order webhook failed for %s: %s', order.order_id, exc)
            record_failure(order.order_id, payload, str(exc))
            return False
        logger.info('Order webhook sent for %s', order.order_id)
        return True

    def send_test(self):
        """Post the sample payload. Errors propagate to the caller."""
        if not self.enabled:
            raise requests.RequestException('No order webhook configured')
        return self.post(sample_payload(self.currency))


def record_failure(order_ref, payload, error):
    """Store a failed delivery. Never raises."""
    try:
        db.session.add(NotificationFailure(order_ref=order_ref, payload=payload, error=error))
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not record failed notification for %s', order_ref)


def notify_order(order, notifier=None):
    """Fire-and-forget hook called after an order is committed."""
    notifier = notifier or OrderNotifier.from_config()
    try:
        return notifier.send(order)
    except Exception:
        # The order is already saved; nothing here may reach the customer.
        logger.exception('Unexpected error notifying order %s', order.order_id)
        return False


def retry_failed_notifications(notifier=None):
    """Replay pending dead letters. Returns (delivered, still_failing)."""
    notifier = notifier or OrderNotifier.from_config()
    delivered = failing = 0
    for failure in NotificationFailure.pending().all():
        failure.attempts += 1
        failure.last_attempt_at = datetime.utcnow()
        try:
            notifier.post(failure.payload)
        except requests.RequestException as exc:
            failure.error = str(exc)
            failing += 1
        else:
            failure.delivered_at = datetime.utcnow()
            delivered += 1
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not save notification retry results')
        raise
    logger.info('Notification retry: %s delivered, %s still failing', delivered, failing)
    return delivered, failing
