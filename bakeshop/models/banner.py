"""Homepage banner model."""

from datetime import datetime
from bakeshop.extensions import db

BANNER_TYPES = ('image', 'video')


class Banner(db.Model):
    """Carousel banner; display_order is kept dense by services.banners."""
    __tablename__ = 'banner_settings'

    id = db.Column(db.Integer, primary_key=True)
    banner_type = db.Column(db.String(10), nullable=False, default='image')
    banner_url = db.Column(db.String(500), nullable=False)
    display_order = db.Column(db.Integer, nullable=False, default=0, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_video(self):
        return self.banner_type == 'video'

    def to_dict(self):
        return {
            'id': self.id,
            'banner_type': self.banner_type,
            'banner_url': self.banner_url,
            'display_order': self.display_order,
        }

    def __repr__(self):
        return f'<Banner {self.id} #{self.display_order}>'
