"""
Product Repository

Create/read/update/delete against the ``products`` table. Image files
referenced by a product are written and removed through the media store.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from catalog.errors import NotFound, StorageError, ValidationError
from catalog.models import Product
from catalog.models.product import utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'description', 'price')

# Largest id an integer primary key can hold
MAX_ID = 2 ** 63 - 1


def validate_product_fields(name, description, price):
    """Raise ValidationError naming every required field that is empty."""
    values = {'name': name, 'description': description, 'price': price}
    missing = [field for field in REQUIRED_FIELDS if not values[field]]
    if missing:
        raise ValidationError(errors=missing)


class ProductRepository:
    """Product rows, kept in sync with the files in ``media``."""

    def __init__(self, session, media):
        self.session = session
        self.media = media

    def list_all(self):
        """All products, newest first."""
        return self.session.query(Product)\
            .order_by(Product.created_at.desc(), Product.id.desc()).all()

    def get_by_id(self, product_id):
        if not 0 < product_id <= MAX_ID:
            raise NotFound()
        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFound()
        return product

    def create(self, name, description, price, icon=None, image_path=None):
        validate_product_fields(name, description, price)

        product = Product(name=name, description=description, price=price,
                          icon=icon or None, image=image_path)
        self.session.add(product)
        self._commit('create product')
        logger.info('Created product %s', product.id)

        # Re-read to pick up server-assigned values
        return self.get_by_id(product.id)

    def update(self, product_id, name, description, price, icon=None, image=None):
        """Replace name, description, price and icon; swap the image if ``image`` is given.

        ``image`` is an ``ImageUpload``. The previous file is only removed
        once the row pointing at the new one has been committed.
        """
        product = self.get_by_id(product_id)
        validate_product_fields(name, description, price)

        old_image = product.image
        new_image = None
        if image is not None:
            new_image = self.media.store(image.data, image.filename, image.mimetype)

        product.name = name
        product.description = description
        product.price = price
        product.icon = icon or None
        if new_image:
            product.image = new_image
        product.updated_at = utcnow()

        try:
            self._commit('update product %s' % product_id)
        except StorageError:
            if new_image:
                self.media.delete(new_image)
            raise
        logger.info('Updated product %s', product_id)

        if new_image and old_image:
            self._discard_image(old_image)

        return self.get_by_id(product_id)

    def delete(self, product_id):
        """Delete the row, then its image file."""
        product = self.get_by_id(product_id)
        image = product.image

        self.session.delete(product)
        self._commit('delete product %s' % product_id)
        logger.info('Deleted product %s', product_id)

        if image:
            self._discard_image(image)

    def _commit(self, action):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception('Database error during %s', action)
            raise StorageError() from e

    def _discard_image(self, path):
        # The row no longer references the file, so a failure here only leaves an orphan
        try:
            self.media.delete(path)
        except StorageError:
            logger.warning('Orphaned image left on disk: %s', path)
