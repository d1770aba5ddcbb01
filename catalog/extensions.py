"""
Flask Extensions
"""

from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

# Database instance
db = SQLAlchemy()

# Cross-origin requests are allowed on every route
cors = CORS()
