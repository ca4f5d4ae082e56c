"""Flask application factory."""

import logging
import os
from flask import Flask, render_template
from .config import config
from .extensions import db, migrate, login_manager, bcrypt, csrf


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    app.logger.setLevel(getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))
    logging.getLogger('bakeshop').setLevel(app.logger.level)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)

    # Create upload directories
    for dir_name in ['items', 'banners', 'logo', 'signature']:
        dir_path = os.path.join(app.config['UPLOAD_FOLDER'], dir_name)
        os.makedirs(dir_path, exist_ok=True)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    from .cli import register_commands
    register_commands(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    @app.template_filter('money')
    def money_filter(value):
        """Format an amount with the shop currency."""
        return f"{app.config['CURRENCY']} {float(value or 0):.2f}"

    # Context processors
    @app.context_processor
    def inject_globals():
        from .models import SiteSetting
        from .services.cart import Cart
        return dict(cart_count=Cart.from_session().count,
                    logo_url=SiteSetting.get_value('logo_url'))

    return app
