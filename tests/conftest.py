"""
Pytest configuration and fixtures for API testing.

Every test using `app` or `api` runs once per storage backend.
"""
import pytest

from tgcommunity import create_app
from tgcommunity.config import STORAGES
from tgcommunity.stores import open_stores


@pytest.fixture(params=STORAGES)
def app(request, tmp_path):
    """Fresh app per test: empty stores, log file and database under tmp_path."""
    app = create_app({
        'TESTING': True,
        'STORAGE': request.param,
        'DB_PATH': tmp_path / 'app.sqlite',
        'LOG_FILE': tmp_path / 'logs.txt',
        'SEED_DEMO_DATA': False,
    })
    yield app
    app.extensions['stores'].close()


@pytest.fixture(params=STORAGES)
def stores(request, tmp_path):
    """Stores without the HTTP layer."""
    s = open_stores(request.param, tmp_path / 'app.sqlite')
    yield s
    s.close()


@pytest.fixture
def api(app):
    """API client fixture - provides helper methods for API calls."""
    class APIClient:
        def __init__(self, client):
            self.client = client

        def get(self, path: str, **kwargs):
            return self.client.get(path, **kwargs)

        def post(self, path: str, json: dict = None, **kwargs):
            return self.client.post(path, json=json, **kwargs)

        def put(self, path: str, json: dict = None, **kwargs):
            return self.client.put(path, json=json, **kwargs)

        def delete(self, path: str, **kwargs):
            return self.client.delete(path, **kwargs)

        def options(self, path: str, **kwargs):
            return self.client.options(path, **kwargs)

        def create_post(self, title: str, content: str, author_id: int = None) -> dict:
            r = self.post('/api/posts', json={'title': title, 'content': content, 'author_id': author_id})
            assert r.status_code == 200, f"Create post failed: {r.data!r}"
            return r.json

        def list_posts(self) -> list:
            r = self.get('/api/posts')
            assert r.status_code == 200, f"List posts failed: {r.data!r}"
            return r.json

        def register_user(self, telegram_id, **fields) -> dict:
            r = self.post('/api/users', json={'telegram_id': telegram_id, **fields})
            assert r.status_code == 200, f"Register failed: {r.data!r}"
            return r.json

        def referrals(self, telegram_id: int) -> dict:
            r = self.get(f'/api/users/{telegram_id}/referrals')
            assert r.status_code == 200, f"Referrals failed: {r.data!r}"
            return r.json

    return APIClient(app.test_client())
