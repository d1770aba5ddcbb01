"""
Models Package

Exports all models for easy importing.
"""

from catalog.models.product import Product
from catalog.models.admin import Admin

__all__ = ['Product', 'Admin']
