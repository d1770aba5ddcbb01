"""
Configuration settings for the Product Catalog backend
"""
import os


def _database_uri():
    """Build the SQLAlchemy URI from DATABASE_URL or the DB_* variables."""
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    host = os.environ.get('DB_HOST')
    user = os.environ.get('DB_USER')
    name = os.environ.get('DB_NAME')
    if not (host and user and name):
        return None

    password = os.environ.get('DB_PASSWORD', '')
    port = os.environ.get('DB_PORT') or os.environ.get('MYSQL_PORT') or 3306
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"


class Config:
    """Flask application configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 0,
        'pool_pre_ping': True,
    }

    # HTTP
    PORT = int(os.environ.get('PORT') or 3000)
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024

    # Image uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'uploads')
    MAX_IMAGE_SIZE = 5 * 1024 * 1024

    # Default admin row seeded at startup (stored and compared in plaintext)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
