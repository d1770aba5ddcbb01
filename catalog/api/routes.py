"""
API Routes

Every response is a JSON envelope: ``{"success": bool, ...}``.
"""

import logging

from flask import current_app, jsonify, request

from catalog.api import api_bp
from catalog.api.decorators import json_errors
from catalog.errors import AuthFailed
from catalog.extensions import db
from catalog.services import ImageUpload, validate_product_fields, verify_admin

logger = logging.getLogger(__name__)


def _products():
    return current_app.extensions['product_repository']


def _media():
    return current_app.extensions['media_store']


def _request_data():
    """Form fields, or the JSON body when it is an object."""
    if request.form:
        return request.form
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _product_fields():
    """Read name/description/price/icon from the form, or from a JSON body."""
    data = _request_data()
    fields = {}
    for key in ('name', 'description', 'price', 'icon'):
        value = data.get(key)
        fields[key] = str(value).strip() if value is not None else ''
    fields['icon'] = fields['icon'] or None
    return fields


def _image_upload():
    """The uploaded ``image`` file, or None when no file was sent."""
    upload = request.files.get('image')
    if upload is None or not upload.filename:
        return None
    # One byte past the limit is enough for the size check to reject it
    data = upload.read(_media().max_size + 1)
    return ImageUpload(data=data, filename=upload.filename, mimetype=upload.mimetype)


@api_bp.route('/products', methods=['GET'])
@json_errors('Server error')
def list_products():
    """All products, newest first."""
    products = _products().list_all()
    return jsonify(success=True, products=[p.to_dict() for p in products])


@api_bp.route('/products/<int:product_id>', methods=['GET'])
@json_errors('Server error')
def get_product(product_id):
    product = _products().get_by_id(product_id)
    return jsonify(success=True, product=product.to_dict())


@api_bp.route('/products', methods=['POST'])
@json_errors('Error while adding the product')
def create_product():
    """Create a product, storing the optional image first."""
    fields = _product_fields()
    validate_product_fields(fields['name'], fields['description'], fields['price'])

    image = _image_upload()
    image_path = None
    if image is not None:
        image_path = _media().store(image.data, image.filename, image.mimetype)

    try:
        product = _products().create(image_path=image_path, **fields)
    except Exception:
        # Do not leave a file behind that no row references
        if image_path:
            _media().delete(image_path)
        raise

    return jsonify(success=True, message='Product added successfully', product=product.to_dict())


@api_bp.route('/products/<int:product_id>', methods=['PUT'])
@json_errors('Error while updating the product')
def update_product(product_id):
    fields = _product_fields()
    product = _products().update(product_id, image=_image_upload(), **fields)
    return jsonify(success=True, message='Product updated successfully', product=product.to_dict())


@api_bp.route('/products/<int:product_id>', methods=['DELETE'])
@json_errors('Error while deleting the product')
def delete_product(product_id):
    _products().delete(product_id)
    return jsonify(success=True, message='Product deleted successfully')


@api_bp.route('/admin/login', methods=['POST'])
@json_errors('Server error')
def admin_login():
    """Check admin credentials. No session or token is issued."""
    data = _request_data()
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        username = password = ''

    if not verify_admin(db.session, username, password):
        logger.info('Failed admin login for %r', username)
        raise AuthFailed()

    return jsonify(success=True, message='Login successful')
