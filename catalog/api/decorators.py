"""
API Decorators
"""

import logging
from functools import wraps

from flask import jsonify
from werkzeug.exceptions import HTTPException

from catalog.errors import CatalogError, StorageError
from catalog.extensions import db

logger = logging.getLogger(__name__)


def json_errors(server_message):
    """Turn exceptions raised by a handler into JSON envelopes.

    Client errors (validation, not found, bad credentials) keep their own
    status and message. Everything else is logged, the session is rolled
    back and a 500 with ``server_message`` is returned.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except HTTPException:
                raise
            except StorageError:
                db.session.rollback()
                return jsonify(success=False, message=server_message), 500
            except CatalogError as e:
                return jsonify(e.to_dict()), e.status_code
            except Exception:
                logger.exception('Unhandled error in %s', f.__name__)
                db.session.rollback()
                return jsonify(success=False, message=server_message), 500
        return wrapper
    return decorator
