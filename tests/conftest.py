import os
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import Generator

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("RATE_LIMITING_ENABLED", "false")
os.environ.setdefault("METRICS_ENABLED", "false")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")
os.environ.setdefault("SECRET_KEY", "test-secret")

from laserworks.config import get_settings, reset_settings_cache  # noqa: E402

reset_settings_cache()

from laserworks.app import app  # noqa: E402
from laserworks.auth import PasswordHasher, TokenCodec  # noqa: E402
from laserworks.database import Base, SessionLocal, engine  # noqa: E402
from laserworks.managers import ReviewManager, ServiceManager, UserManager, UserServiceManager  # noqa: E402

PASSWORD = "password1"


def user_data(username: str, **overrides) -> dict:
    data = {
        "username": username,
        "password": PASSWORD,
        "firstName": f"{username.upper()}First",
        "lastName": f"{username.upper()}Last",
        "email": f"{username}@example.com",
        "birthDate": date(1990, 1, 1),
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True, scope="function")
def _create_test_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def settings():
    return get_settings()


@pytest.fixture()
def codec(settings) -> TokenCodec:
    return TokenCodec(settings)


@pytest.fixture()
def user_manager(db_session, settings) -> UserManager:
    return UserManager(db_session, PasswordHasher(settings))


@pytest.fixture()
def service_manager(db_session) -> ServiceManager:
    return ServiceManager(db_session)


@pytest.fixture()
def user_service_manager(db_session) -> UserServiceManager:
    return UserServiceManager(db_session)


@pytest.fixture()
def review_manager(db_session) -> ReviewManager:
    return ReviewManager(db_session)


@pytest.fixture()
def seeded(user_manager, service_manager, user_service_manager, review_manager) -> dict:
    """Two regular users, an admin, two services, one order for u1 and one review by u1."""
    u1 = user_manager.register(user_data("u1"))
    u2 = user_manager.register(user_data("u2"))
    admin = user_manager.register(user_data("admin", role="admin"))
    s1 = service_manager.add_service("Wood engraving", "Custom engraving on wood", Decimal("100.00"))
    s2 = service_manager.add_service("Glass etching", "Etching on glassware", Decimal("50.00"), False)
    order = user_service_manager.add_service_to_user("u1", s1.id, Decimal("90.00"), "Family name on a board")
    review = review_manager.add_review(
        {"userId": u1.id, "serviceId": s1.id, "reviewText": "Beautiful work", "rating": 5}
    )
    return {
        "u1": u1.id,
        "u2": u2.id,
        "admin": admin.id,
        "s1": s1.id,
        "s2": s2.id,
        "order": order.id,
        "review": review.id,
    }


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def tokens(seeded, codec) -> dict:
    """Auth headers for the seeded users, keyed by username."""
    return {
        "u1": bearer(codec.encode(SimpleNamespace(username="u1", role="regular", is_verified=False))),
        "u2": bearer(codec.encode(SimpleNamespace(username="u2", role="regular", is_verified=False))),
        "admin": bearer(codec.encode(SimpleNamespace(username="admin", role="admin", is_verified=False))),
    }
