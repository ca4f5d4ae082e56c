"""Routes package - register all blueprints."""

from flask import Flask


def register_blueprints(app: Flask):
    """Register all blueprints with the application."""
    from .auth import auth_bp
    from .main import main_bp
    from .cart import cart_bp
    from .orders import orders_bp
    from .admin import admin_bp
    from .api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(cart_bp, url_prefix='/cart')
    app.register_blueprint(orders_bp, url_prefix='/order')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(api_bp, url_prefix='/api')
