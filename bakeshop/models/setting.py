"""Site settings key/value model."""

from datetime import datetime
from bakeshop.extensions import db


class SiteSetting(db.Model):
    """Single key/value setting such as the shop logo URL."""
    __tablename__ = 'site_settings'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    value = db.Column(db.Text)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @staticmethod
    def get_value(key, default=None):
        setting = SiteSetting.query.filter_by(key=key).first()
        return setting.value if setting else default

    @staticmethod
    def set_value(key, value):
        """Insert or update a setting. Caller commits."""
        setting = SiteSetting.query.filter_by(key=key).first()
        if setting is None:
            setting = SiteSetting(key=key)
            db.session.add(setting)
        setting.value = value
        setting.updated_at = datetime.utcnow()
        return setting

    def __repr__(self):
        return f'<SiteSetting {self.key}>'
