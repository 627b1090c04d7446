import pytest

from recall_app import create_app, db
from recall_app.config import Config
from recall_app.models import MemoryName


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    RATELIMIT_ENABLED = False
    RECALL_JSON_FALLBACK = False
    RECALL_STORE_TTL = 0
    RECALL_STORE_WARMUP = False
    LOG_LEVEL = 'DEBUG'


POOL = [f"Name{i:02d}" for i in range(30)]


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed_pool(app):
    def _seed(names=POOL, active=True):
        for n in names:
            db.session.add(MemoryName(name=n, active=active))
        db.session.commit()
        return list(names)
    return _seed
