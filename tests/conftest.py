"""
Shared fixtures for the shop service tests.

Each test gets its own SQLite file database (so worker threads can open
their own connections and exercise the locking path), an in-memory
stand-in for the redis client used by the session store, and a notifier
that records instead of enqueuing celery tasks.
"""
import os

# must be set before anything from app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_PRODUCTS"] = "0"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.api import create_app
from app.api.deps import get_session_store, get_notifier
from app.data.database import create_db_engine, init_db, get_db
from app.data.models import UserModel, ProductModel
from app.services.catalog import DbCatalog
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.session_store import SessionStore


class FakeRedis:
    """Minimal subset of the redis client API used by SessionStore."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def set(self, name, value, ex=None):
        self.data[name] = value
        self.ttls[name] = ex
        return True

    def get(self, name):
        return self.data.get(name)

    def delete(self, *names):
        removed = 0
        for name in names:
            if self.data.pop(name, None) is not None:
                removed += 1
        return removed


class RecordingNotifier:
    def __init__(self):
        self.sent = []
        self.receipts = {}

    def send_sale_notification(self, user_id, sale_id, total_price, line_count):
        self.sent.append((user_id, sale_id))
        self.receipts[sale_id] = (total_price, line_count)


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(username="alice", user_id=None):
        user = UserModel(
            id=user_id,
            username=username,
            email=f"{username}@example.com",
            password_hash="not-a-real-hash",
        )
        db.add(user)
        db.flush()
        new_id = user.id
        db.commit()
        return new_id

    return _make


@pytest.fixture
def make_product(db):
    def _make(price, name="Product", product_id=None):
        product = ProductModel(id=product_id, name=name, price=Decimal(price))
        db.add(product)
        db.flush()
        new_id = product.id
        db.commit()
        return new_id

    return _make


@pytest.fixture
def set_price(db):
    def _set(product_id, price):
        product = db.get(ProductModel, product_id)
        product.price = Decimal(price)
        db.commit()

    return _set


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def cart_service(db):
    return CartService(db, DbCatalog(db))


@pytest.fixture
def checkout_service(db, notifier):
    return CheckoutService(db, notifier=notifier)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def test_client(session_factory, fake_redis, notifier):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: SessionStore(client=fake_redis)
    app.dependency_overrides[get_notifier] = lambda: notifier

    return TestClient(app)
