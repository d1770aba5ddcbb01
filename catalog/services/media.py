"""
Media Store

Writes uploaded product images to the local upload directory and removes
them again when a product's image is replaced or the product is deleted.
Files are stored verbatim.
"""

import logging
import os
import random
import time
from collections import namedtuple

from werkzeug.utils import secure_filename

from catalog.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {'jpeg', 'jpg', 'png', 'gif', 'webp'}

# An image received from a client, before it is stored
ImageUpload = namedtuple('ImageUpload', ['data', 'filename', 'mimetype'])


def is_allowed_image(filename, mimetype):
    """Both the declared media type and the extension must be on the allow-list."""
    main_type, _, sub_type = (mimetype or '').lower().partition('/')
    ext = os.path.splitext(filename or '')[1].lower().lstrip('.')
    return main_type == 'image' and sub_type in ALLOWED_IMAGE_TYPES and ext in ALLOWED_IMAGE_TYPES


class MediaStore:
    """Image files under ``upload_dir``, addressed as ``<url_prefix>/<name>``."""

    def __init__(self, upload_dir, max_size=5 * 1024 * 1024, url_prefix='/uploads'):
        self.upload_dir = os.path.abspath(upload_dir)
        self.max_size = max_size
        self.url_prefix = url_prefix.rstrip('/')

    def store(self, data, original_filename, mimetype):
        """Validate and write an image, returning the path to record on the product."""
        if not is_allowed_image(original_filename, mimetype):
            raise ValidationError('Only images are allowed (jpeg, jpg, png, gif, webp)',
                                  errors=['image'])
        if not data:
            raise ValidationError('The uploaded image is empty', errors=['image'])
        if len(data) > self.max_size:
            raise ValidationError(
                f'Image exceeds the maximum size of {self.max_size // (1024 * 1024)} MB',
                errors=['image'])

        ext = os.path.splitext(original_filename)[1]
        try:
            os.makedirs(self.upload_dir, exist_ok=True)
            while True:
                name = self._generate_name(ext)
                try:
                    # 'x' mode never overwrites an existing file
                    with open(os.path.join(self.upload_dir, name), 'xb') as fh:
                        fh.write(data)
                    break
                except FileExistsError:
                    continue
        except OSError as e:
            logger.error('Could not write image %s: %s', original_filename, e)
            raise StorageError() from e

        logger.info('Stored image %s (%d bytes)', name, len(data))
        return f'{self.url_prefix}/{name}'

    def delete(self, path):
        """Remove the file behind ``path``. Missing files are ignored."""
        full_path = self.resolve(path)
        if full_path is None:
            return
        try:
            os.remove(full_path)
            logger.info('Deleted image %s', path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error('Could not delete image %s: %s', path, e)
            raise StorageError() from e

    def resolve(self, path):
        """Map a stored path to a file inside the upload directory, or None."""
        if not path:
            return None
        name = os.path.basename(path)
        if not name or name != secure_filename(name):
            return None
        return os.path.join(self.upload_dir, name)

    def exists(self, path):
        full_path = self.resolve(path)
        return full_path is not None and os.path.isfile(full_path)

    @staticmethod
    def _generate_name(ext):
        return f'{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}'
