"""Role-based access decorators."""

from functools import wraps
from flask import redirect, url_for, flash, abort, request, jsonify, g
from flask_login import current_user
from bakeshop.models import User


def admin_required(f):
    """Decorator to require admin role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login', next=request.path))
        if not current_user.is_admin():
            flash('Access denied. Admin privileges required.', 'danger')
            abort(403)
        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """Decorator for JSON endpoints authenticated with a bearer token.

    The authenticated user is stored on ``g.api_user``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        if not auth_header:
            return jsonify({'error': 'Missing authorization header'}), 401

        token = auth_header.replace('Bearer ', '', 1).strip()
        user = User.verify_api_token(token)
        if user is None:
            return jsonify({'error': 'Unauthorized'}), 401
        if not user.is_admin():
            return jsonify({'error': 'Admin access required'}), 403

        g.api_user = user
        return f(*args, **kwargs)
    return decorated_function
