"""
Error types raised by the catalog services.

Each error carries the HTTP status and the user-facing message the API
returns for it.
"""


class CatalogError(Exception):
    """Base class for errors that map directly to an API response."""
    status_code = 500
    message = 'Server error'

    def __init__(self, message=None, errors=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.errors = errors

    def to_dict(self):
        body = {'success': False, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationError(CatalogError):
    """Missing product fields or a rejected image upload."""
    status_code = 400
    message = 'All required fields must be filled in'


class NotFound(CatalogError):
    status_code = 404
    message = 'Product not found'


class AuthFailed(CatalogError):
    status_code = 401
    message = 'Invalid credentials'


class StorageError(CatalogError):
    """Database or filesystem failure. The message never carries details."""
    status_code = 500
    message = 'Server error'


class ConfigurationError(RuntimeError):
    """Raised at startup when the database is not configured."""
