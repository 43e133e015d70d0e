"""Shared test fixtures and configuration."""
import os

# Settings are read at import time; keep the app away from the real database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTO_INIT_DB"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from boothops.main import app  # noqa: E402
from boothops.db import Base, create_db_engine  # noqa: E402
from boothops.db.models import BoothAdmin  # noqa: E402
from boothops.db.seed import seed_all  # noqa: E402
from boothops.api.deps import get_db, get_session_store  # noqa: E402
from boothops.core.config import settings  # noqa: E402
from boothops.core.sessions import InMemorySessionStore  # noqa: E402


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
BOOTH_PIN = "0000"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from boothops.core.rate_limit import limiter

    if "rate_limit" in request.keywords:
        limiter.enabled = True
        limiter.reset()
        yield
        limiter.reset()
        limiter.enabled = False
    else:
        limiter.enabled = False
        yield


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_db_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """A session on a database seeded with the festival booths, admins and roster."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    seed_all(session, settings)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_store():
    return InMemorySessionStore()


@pytest.fixture(scope="function")
def client(db_session, session_store):
    """Create a test client with a test database and an isolated session store."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_id(db_session):
    """Look up a booth admin's id by class name."""
    def _admin_id(class_name):
        return db_session.query(BoothAdmin).filter(BoothAdmin.class_name == class_name).one().id
    return _admin_id


@pytest.fixture
def login_as(client):
    """Log in through the API and return the response body."""
    def _login(class_name, password, prefix="/api"):
        response = client.post(
            f"{prefix}/admin/booth-login",
            json={"className": class_name, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _login


@pytest.fixture
def super_headers(login_as):
    data = login_as(settings.SUPERADMIN_CLASS_NAME, settings.SUPERADMIN_PASSWORD)
    return {"x-admin-token": data["token"]}


@pytest.fixture
def booth_login(login_as):
    """Log in as booth 1-1 (booth id 1)."""
    return login_as("1-1", BOOTH_PIN)


@pytest.fixture
def booth_headers(booth_login):
    return {"x-admin-token": booth_login["token"]}
