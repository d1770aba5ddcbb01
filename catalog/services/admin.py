"""
Admin Credential Check
"""

from catalog.models import Admin


def verify_admin(session, username, password):
    """Return True if a stored admin row matches both values exactly.

    Plaintext equality, no hashing, lockout or rate limiting.
    """
    if not username or not password:
        return False
    match = session.query(Admin.id).filter_by(username=username, password=password).first()
    return match is not None
