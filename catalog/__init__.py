"""
Product Catalog - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask, jsonify, request

from catalog.config import Config
from catalog.errors import ConfigurationError
from catalog.extensions import cors, db

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def create_app(config_class=Config, overrides=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        overrides: Optional mapping applied on top of ``config_class``

    Returns:
        Configured Flask application instance

    Raises:
        ConfigurationError: no database is configured
        sqlalchemy.exc.OperationalError: the database cannot be reached
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    _configure_logging(app)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise ConfigurationError(
            'Database is not configured: set DATABASE_URL or DB_HOST, DB_USER and DB_NAME')

    # Initialize extensions
    db.init_app(app)
    cors.init_app(app)

    # Storage clients, built once and shared by every request
    from catalog.services import MediaStore, ProductRepository
    media_store = MediaStore(app.config['UPLOAD_FOLDER'], max_size=app.config['MAX_IMAGE_SIZE'])
    app.extensions['media_store'] = media_store
    app.extensions['product_repository'] = ProductRepository(db.session, media_store)

    # Register blueprints
    from catalog.api import api_bp
    from catalog.site import site_bp

    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(site_bp)

    _register_error_handlers(app)
    _register_commands(app)

    # Create database tables
    from catalog.services import init_schema
    with app.app_context():
        init_schema(app)

    logger.info('Application initialized (uploads in %s)', media_store.upload_dir)
    return app


def _configure_logging(app):
    """Attach a stream handler to the root logger once."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def _register_error_handlers(app):
    """JSON envelopes for unknown API routes and methods."""

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify(success=False, message='Not found'), 404
        return error

    @app.errorhandler(405)
    def method_not_allowed(error):
        if request.path.startswith('/api/'):
            return jsonify(success=False, message='Method not allowed'), 405
        return error

    @app.errorhandler(413)
    def too_large(error):
        return jsonify(success=False, message='Request body is too large'), 413


def _register_commands(app):
    from catalog.services import init_schema

    @app.cli.command('init-db')
    def init_db_command():
        """Create missing tables and the default admin."""
        init_schema(app)
        print('Database initialized.')
