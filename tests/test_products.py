import io

from catalog.models import Product


def create(client, **overrides):
    data = {'name': 'Tea', 'description': 'Green tea', 'price': '3.50'}
    data.update(overrides)
    return client.post('/api/products', data=data, content_type='multipart/form-data')


def test_list_empty(client):
    r = client.get('/api/products')
    assert r.status_code == 200
    assert r.get_json() == {'success': True, 'products': []}


def test_create_without_image(client):
    r = create(client)
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['message']
    product = body['product']
    assert product['id'] > 0
    assert product['name'] == 'Tea'
    assert product['description'] == 'Green tea'
    assert product['price'] == '3.50'
    assert product['icon'] is None
    assert product['image'] is None
    assert product['created_at']
    assert product['updated_at']


def test_create_accepts_json_body(client):
    r = client.post('/api/products', json={'name': 'Mug', 'description': 'Blue mug',
                                           'price': '9', 'icon': 'M'})
    assert r.status_code == 200
    assert r.get_json()['product']['icon'] == 'M'


def test_create_missing_name_is_rejected(client, app):
    r = client.post('/api/products', data={'description': 'Green tea', 'price': '3.50'})
    assert r.status_code == 400
    body = r.get_json()
    assert body['success'] is False
    assert body['errors'] == ['name']
    assert Product.query.count() == 0


def test_create_empty_fields_are_rejected(client):
    for field in ('name', 'description', 'price'):
        r = create(client, **{field: ''})
        assert r.status_code == 400
        assert field in r.get_json()['errors']
    assert client.get('/api/products').get_json()['products'] == []


def test_list_is_newest_first(client):
    ids = [create(client, name=f'Product {i}').get_json()['product']['id'] for i in range(3)]
    products = client.get('/api/products').get_json()['products']
    assert [p['id'] for p in products] == list(reversed(ids))


def test_get_product(client):
    created = create(client, icon='T').get_json()['product']
    r = client.get(f"/api/products/{created['id']}")
    assert r.status_code == 200
    assert r.get_json()['product'] == created


def test_get_unknown_product(client):
    r = client.get('/api/products/999')
    assert r.status_code == 404
    assert r.get_json()['success'] is False


def test_create_with_image(client, png_file, upload_dir):
    r = create(client, image=png_file())
    assert r.status_code == 200
    image = r.get_json()['product']['image']
    assert image.startswith('/uploads/')
    assert image.endswith('.png')
    assert (upload_dir / image.rsplit('/', 1)[1]).is_file()

    served = client.get(image)
    assert served.status_code == 200
    assert served.data.startswith(b'\x89PNG')


def test_create_with_disguised_text_file(client, upload_dir):
    fake = (io.BytesIO(b'just some text'), 'notes.png', 'text/plain')
    r = create(client, image=fake)
    assert r.status_code == 400
    assert r.get_json()['errors'] == ['image']
    assert Product.query.count() == 0
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


def test_create_invalid_fields_does_not_store_image(client, png_file, upload_dir):
    r = create(client, name='', image=png_file())
    assert r.status_code == 400
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


def test_update_without_image_keeps_image(client, png_file):
    created = create(client, image=png_file()).get_json()['product']
    r = client.put(f"/api/products/{created['id']}",
                   data={'name': 'Black tea', 'description': 'Strong', 'price': '4.00'})
    assert r.status_code == 200
    product = r.get_json()['product']
    assert product['name'] == 'Black tea'
    assert product['description'] == 'Strong'
    assert product['price'] == '4.00'
    assert product['image'] == created['image']
    assert product['created_at'] == created['created_at']


def test_update_replaces_image(client, png_file, upload_dir):
    created = create(client, image=png_file('old.png')).get_json()['product']
    old_name = created['image'].rsplit('/', 1)[1]

    r = client.put(f"/api/products/{created['id']}",
                   data={'name': 'Tea', 'description': 'Green tea', 'price': '3.50',
                         'image': png_file('new.png')},
                   content_type='multipart/form-data')
    assert r.status_code == 200
    new_image = r.get_json()['product']['image']
    assert new_image != created['image']
    assert not (upload_dir / old_name).exists()
    assert client.get(created['image']).status_code == 404
    assert client.get(new_image).status_code == 200


def test_update_clears_icon(client):
    created = create(client, icon='T').get_json()['product']
    r = client.put(f"/api/products/{created['id']}",
                   data={'name': 'Tea', 'description': 'Green tea', 'price': '3.50'})
    assert r.get_json()['product']['icon'] is None


def test_update_unknown_product(client):
    r = client.put('/api/products/42', data={'name': 'a', 'description': 'b', 'price': 'c'})
    assert r.status_code == 404
    assert r.get_json()['success'] is False


def test_update_missing_fields(client):
    created = create(client).get_json()['product']
    r = client.put(f"/api/products/{created['id']}", data={'name': 'Only name'})
    assert r.status_code == 400
    assert sorted(r.get_json()['errors']) == ['description', 'price']


def test_delete_product(client, png_file, upload_dir):
    created = create(client, image=png_file()).get_json()['product']
    r = client.delete(f"/api/products/{created['id']}")
    assert r.status_code == 200
    assert r.get_json()['success'] is True

    assert client.get(f"/api/products/{created['id']}").status_code == 404
    assert client.get(created['image']).status_code == 404
    assert not any(upload_dir.iterdir())


def test_delete_unknown_product(client):
    r = client.delete('/api/products/7')
    assert r.status_code == 404
    assert r.get_json()['success'] is False


def test_storage_error_returns_generic_500(client, repository, monkeypatch):
    def broken():
        raise RuntimeError('connection lost: secret-host:3306')

    monkeypatch.setattr(repository, 'list_all', broken)
    r = client.get('/api/products')
    assert r.status_code == 500
    body = r.get_json()
    assert body == {'success': False, 'message': 'Server error'}


def test_failed_insert_removes_stored_image(client, repository, png_file, upload_dir, monkeypatch):
    def broken(**kwargs):
        raise RuntimeError('insert failed')

    monkeypatch.setattr(repository, 'create', broken)
    r = create(client, image=png_file())
    assert r.status_code == 500
    assert r.get_json()['message'] == 'Error while adding the product'
    assert not any(upload_dir.iterdir())


def test_unknown_api_route(client):
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert r.get_json()['success'] is False


def test_landing_page(client):
    r = client.get('/')
    assert r.status_code == 200
    assert b'Product Catalog' in r.data


def test_missing_upload(client):
    assert client.get('/uploads/does-not-exist.png').status_code == 404


def test_create_with_json_array_body(client):
    r = client.post('/api/products', json=['Tea', 'Green tea', '3.50'])
    assert r.status_code == 400
    body = r.get_json()
    assert body['success'] is False
    assert body['errors'] == ['name', 'description', 'price']


def test_create_with_json_scalar_body(client):
    r = client.post('/api/products', json='Tea')
    assert r.status_code == 400


def test_get_id_beyond_integer_range(client):
    r = client.get('/api/products/99999999999999999999')
    assert r.status_code == 404
    assert r.get_json()['success'] is False


def test_create_with_oversized_image(client, app):
    too_big = app.config['MAX_IMAGE_SIZE'] + 10
    r = create(client, image=(io.BytesIO(b'x' * too_big), 'big.png', 'image/png'))
    assert r.status_code == 400
    assert r.get_json()['errors'] == ['image']
    assert Product.query.count() == 0
