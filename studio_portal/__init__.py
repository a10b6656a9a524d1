"""Flask application factory.

This module contains the create_app factory function that initializes
and configures the Flask application.
"""
import logging

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

from studio_portal.config import Config

# Initialize extensions without app context
# These will be initialized with the app in create_app()
db = SQLAlchemy()
migrate = Migrate()

# The store and its backends use db, so they are imported after it exists
from studio_portal.errors import (  # noqa: E402
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from studio_portal.store import store  # noqa: E402

logger = logging.getLogger(__name__)


def _configure_logging(app: Flask) -> None:
    package_logger = logging.getLogger('studio_portal')
    package_logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
        package_logger.addHandler(handler)


def _register_error_handlers(app: Flask) -> None:
    # Routes translate validation and lookup errors themselves; these
    # handlers cover anything raised outside those try blocks.
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return jsonify({'error': str(error)}), 404

    @app.errorhandler(UnauthorizedError)
    def handle_unauthorized(error):
        return jsonify({'error': str(error) or 'Unauthorized'}), 401

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error):
        logger.error("Persistence failure: %s", error)
        return jsonify({'error': 'Storage unavailable'}), 503


def create_app(config_class: type = Config) -> Flask:
    """Create and configure the Flask application.

    Uses the application factory pattern to allow creating multiple
    app instances with different configurations (e.g., for testing).

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    store.init_app(app)

    from studio_portal.services import auth_service
    auth_service.init_app(app)

    from studio_portal.routes import register_blueprints
    register_blueprints(app)
    _register_error_handlers(app)

    # Simple health check route
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'store': store.backend.name}

    return app
