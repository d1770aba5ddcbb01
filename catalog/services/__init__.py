"""
Services Package

Exports all services for easy importing.
"""

from catalog.services.media import MediaStore, ImageUpload, is_allowed_image
from catalog.services.products import ProductRepository, validate_product_fields
from catalog.services.admin import verify_admin
from catalog.services.schema import init_schema, seed_default_admin

__all__ = [
    'MediaStore',
    'ImageUpload',
    'is_allowed_image',
    'ProductRepository',
    'validate_product_fields',
    'verify_admin',
    'init_schema',
    'seed_default_admin'
]
