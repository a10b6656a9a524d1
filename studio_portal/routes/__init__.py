"""Flask blueprints package.

This package contains all route blueprints for the application.
Each blueprint handles a specific area of functionality.
"""
from flask import Flask


def register_blueprints(app: Flask) -> None:
    """Register all application blueprints.

    Called by the app factory to set up all routes.

    Args:
        app: The Flask application instance.
    """
    from studio_portal.routes.auth import auth_bp
    from studio_portal.routes.client_projects import client_projects_bp
    from studio_portal.routes.content import content_bp
    from studio_portal.routes.dashboard import dashboard_bp
    from studio_portal.routes.data import data_bp
    from studio_portal.routes.portal import portal_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(client_projects_bp)
    app.register_blueprint(content_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(data_bp)
    app.register_blueprint(portal_bp)
