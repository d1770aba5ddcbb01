"""
API Blueprint

JSON endpoints for products and the admin credential check.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from catalog.api import routes  # noqa: E402, F401
