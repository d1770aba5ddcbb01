import io

import pytest

from catalog import create_app
from catalog.config import TestConfig
from catalog.extensions import db

# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01'
    b'\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f'
    b'\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture()
def app(upload_dir):
    app = create_app(TestConfig, {'UPLOAD_FOLDER': str(upload_dir)})
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def repository(app):
    return app.extensions['product_repository']


@pytest.fixture()
def media(app):
    return app.extensions['media_store']


@pytest.fixture()
def png_file():
    """Factory for a multipart PNG upload tuple."""
    def make(name='photo.png'):
        return (io.BytesIO(PNG_BYTES), name, 'image/png')
    return make
