"""
Admin Credential Model
"""

from catalog.extensions import db


class Admin(db.Model):
    """Admin credentials.

    The password is stored and compared as plaintext. This is a known weak
    point kept for compatibility with existing rows; hash before any
    production use.
    """
    __tablename__ = 'admin'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)

    def __repr__(self):
        return f'<Admin {self.username}>'
