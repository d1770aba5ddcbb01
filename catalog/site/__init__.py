"""
Site Blueprint

Landing page and uploaded image files.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from catalog.site import routes  # noqa: E402, F401
