import pytest
from redis.exceptions import RedisError

from app.data.seed import seed
from app.data.models.user import UserModel
from app.domain.enums import Role
from app.services.lock_service import LockService
from app.services.notification_service import (
    send_order_placed_notification,
    send_order_status_notification,
)
from app.utils.settings import ADMIN_EMAIL


def test_health_reports_database(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["database"] == "up"


def test_seed_creates_admin_once(database, session):
    first = seed(database)
    second = seed(database)
    assert first is not None
    assert second is None

    admins = session.query(UserModel).filter_by(email=ADMIN_EMAIL).all()
    assert len(admins) == 1
    assert admins[0].role == Role.ADMIN.value


def test_lock_is_exclusive_and_released_only_by_owner(lock_service):
    assert lock_service.acquire_checkout_lock(1, "a", ttl=30) is True
    assert lock_service.acquire_checkout_lock(1, "b", ttl=30) is False
    assert lock_service.acquire_checkout_lock(2, "b", ttl=30) is True

    assert lock_service.release_checkout_lock(1, "b") is False
    assert lock_service.release_checkout_lock(1, "a") is True
    assert LockService.checkout_key(1) not in lock_service.redis.store


def test_lock_retries_transient_redis_errors(fake_redis):
    calls = {"n": 0}
    original_set = fake_redis.set

    def flaky_set(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            raise RedisError("connection reset")
        return original_set(*args, **kwargs)

    fake_redis.set = flaky_set
    lock = LockService(client=fake_redis)

    assert lock.acquire_checkout_lock(1, "a", ttl=30) is True
    assert calls["n"] == 2


def test_lock_gives_up_after_repeated_redis_errors(fake_redis):
    def broken_set(*args, **kwargs):
        raise RedisError("down")

    fake_redis.set = broken_set
    lock = LockService(client=fake_redis)

    with pytest.raises(RedisError):
        lock.acquire_checkout_lock(1, "a", ttl=30)

def test_notification_tasks_run_eagerly():
    placed = send_order_placed_notification.delay(1, 2).get()
    changed = send_order_status_notification.delay(1, 2, "ACCEPTED").get()
    assert placed == {"user_id": 1, "order_id": 2, "status": "sent"}
    assert changed["order_status"] == "ACCEPTED"


def test_unhandled_error_is_generic_500(database, lock_service, monkeypatch):
    from fastapi.testclient import TestClient

    from app.main import create_app
    from app.services.product_service import ProductService

    def boom(self, q):
        raise RuntimeError("driver exploded: secret dsn")

    monkeypatch.setattr(ProductService, "search_products", boom)
    app = create_app(database=database, lock_service=lock_service)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/products/search", params={"q": "abc"})

    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error!", "errorCode": 3001, "errors": None}
