"""
Schema Manager

Creates the ``products`` and ``admin`` tables when missing and seeds the
default admin row. Safe to run on every startup.
"""

import logging

from sqlalchemy.exc import IntegrityError

from catalog.extensions import db
from catalog.models import Admin

logger = logging.getLogger(__name__)


def init_schema(app):
    """Create missing tables and the default admin. Must run in an app context."""
    db.create_all()
    seed_default_admin(db.session, app.config['ADMIN_USERNAME'], app.config['ADMIN_PASSWORD'])


def seed_default_admin(session, username, password):
    """Insert the admin row unless one with ``username`` already exists."""
    if session.query(Admin.id).filter_by(username=username).first() is not None:
        return False

    session.add(Admin(username=username, password=password))
    try:
        session.commit()
    except IntegrityError:
        # Another process seeded it first
        session.rollback()
        return False

    logger.info('Created default admin %r', username)
    return True
