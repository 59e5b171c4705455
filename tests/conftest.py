"""
Shared fixtures: in-memory SQLite per test, in-memory redis double, eager Celery.
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ.setdefault("JWT_SECRET", "test-secret")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.data.database import Database  # noqa: E402
from app.data.models.address import AddressModel  # noqa: E402
from app.data.models.product import ProductModel  # noqa: E402
from app.domain.enums import Role  # noqa: E402
from app.domain.schemas import SignUpIn  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.auth_service import AuthService, create_access_token  # noqa: E402
from app.services.lock_service import LockService  # noqa: E402


class FakeRedis:
    """Minimal in-memory stand-in for the two redis commands LockService uses."""

    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def lock_service(fake_redis):
    return LockService(client=fake_redis)


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def client(database, lock_service):
    app = create_app(database=database, lock_service=lock_service)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(session):
    def _make(email="user@example.com", name="User", password="secret123", role=Role.USER):
        return AuthService(session).sign_up(
            SignUpIn(name=name, email=email, password=password),
            role=role,
        )

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", name="Admin", role=Role.ADMIN)


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_product(session):
    def _make(name="Keyboard", price="10.00", description=None, tags=None):
        product = ProductModel(name=name, description=description, price=Decimal(price))
        product.tags = tags or []
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_address(session):
    def _make(user, line_one="Main St 1", city="Warsaw", country="PL", zip_code="00-001", line_two=None, default=False):
        address = AddressModel(
            line_one=line_one,
            line_two=line_two,
            city=city,
            country=country,
            zip_code=zip_code,
            user_id=user.id,
        )
        session.add(address)
        session.commit()
        if default:
            user.default_shipping_address_id = address.id
            session.commit()
        session.refresh(address)
        return address

    return _make
