"""User model for shop administrators."""

from datetime import datetime
from flask import current_app
from flask_login import UserMixin
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from bakeshop.extensions import db, bcrypt


class User(UserMixin, db.Model):
    """Back-office account. Only the admin role may manage the shop."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='staff')  # staff, admin
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        """Check if user is admin."""
        return self.role == 'admin'

    @staticmethod
    def _token_serializer():
        return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt='api-token')

    def generate_api_token(self):
        """Signed bearer token identifying this user."""
        return self._token_serializer().dumps({'user_id': self.id})

    @classmethod
    def verify_api_token(cls, token):
        """Return the token's user, or None if the token is invalid or expired."""
        try:
            data = cls._token_serializer().loads(
                token, max_age=current_app.config['API_TOKEN_MAX_AGE'])
        except (BadSignature, SignatureExpired):
            return None
        user = db.session.get(cls, data.get('user_id'))
        if user is None or not user.is_active:
            return None
        return user

    def __repr__(self):
        return f'<User {self.email}>'
