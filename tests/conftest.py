import json

import pytest

from app import app as flask_app

ADMIN = {'username': 'admin', 'password': 's3cret'}
DEMO = {'username': 'viewer', 'password': 'peek'}


@pytest.fixture
def valid_menu():
    return {
        'items': [{'name': 'Item %d' % i, 'price': 5 + i} for i in range(8)],
        'featured': {'name': 'Double Bacon', 'price': 12},
        'beverages': [{'name': 'Cola', 'price': 2}, {'name': 'Água', 'price': 1}],
    }


@pytest.fixture
def menu_path(tmp_path, valid_menu):
    path = tmp_path / 'data' / 'menu.json'
    path.parent.mkdir()
    path.write_text(json.dumps(valid_menu, indent=2), encoding='utf-8')
    return path


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture
def staging_dir(tmp_path):
    return tmp_path / 'staging'


@pytest.fixture
def app(menu_path, upload_dir, staging_dir):
    saved = dict(flask_app.config)
    flask_app.config.update(
        TESTING=True,
        MENU_PATH=str(menu_path),
        UPLOAD_FOLDER=str(upload_dir),
        UPLOAD_STAGING_FOLDER=str(staging_dir),
        UPLOAD_URL_PREFIX='img/fastfood',
        ADMIN_USER=ADMIN['username'],
        ADMIN_PASS=ADMIN['password'],
        DEMO_USER=DEMO['username'],
        DEMO_PASS=DEMO['password'],
    )
    yield flask_app
    flask_app.config.clear()
    flask_app.config.update(saved)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    resp = client.post('/api/login', json=ADMIN)
    assert resp.status_code == 200
    return client


@pytest.fixture
def demo_client(app):
    client = app.test_client()
    resp = client.post('/api/demo-login', json=DEMO)
    assert resp.status_code == 200
    return client
