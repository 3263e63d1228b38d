from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.database import get_db
from app.main import app
from app.config import settings
from app.seed import seed_products
from app.services.auth_service import auth_service
from app.services.pricing_service import price_cache
from app.utils.timestamps import parse_timestamp

STRONG_PASSWORD = "Str0ng!Passw0rd"


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def assert_days_from_now(timestamp: str, days: int, reference: datetime | None = None, tolerance: int = 5):
    reference = reference or datetime.now(timezone.utc)
    expected = reference + timedelta(days=days)
    actual = parse_timestamp(timestamp)
    assert abs((actual - expected).total_seconds()) <= tolerance, f"{actual} is not ~{days} days from {reference}"


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "JobBoard"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "jobboard.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from app.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db_session(test_db):
    session = test_db()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db_session):
    seed_products(db_session)
    return db_session


@pytest.fixture(autouse=True)
def fresh_price_cache():
    price_cache.invalidate()
    yield price_cache
    price_cache.invalidate()


@pytest.fixture
def fresh_auth_service():
    """Reset auth service state for each test."""
    original = auth_service.__dict__.copy()
    auth_service._active_tokens = {}
    yield auth_service
    auth_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data_dir, seeded_db, fresh_auth_service):
    original_data_dir = settings.data_dir
    settings.data_dir = tmp_data_dir
    c = TestClient(app)
    yield c
    settings.data_dir = original_data_dir


def register(client, email: str, role: str = "business") -> dict:
    r = client.post("/api/auth/register", json={
        "email": email,
        "password": STRONG_PASSWORD,
        "first_name": "Test",
        "last_name": "User",
        "role": role,
    })
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def business_headers(client):
    return register(client, "owner@acme.com", "business")


@pytest.fixture
def other_business_headers(client):
    return register(client, "rival@globex.com", "business")


@pytest.fixture
def seeker_headers(client):
    return register(client, "seeker@example.com", "job_seeker")


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Line Cook",
        "company": "Acme Diner",
        "location": "Austin, TX",
        "type": "Full-time",
        "description": "Prep and cook breakfast and lunch service.",
        "requirements": "2 years kitchen experience",
        "compensation_type": "hourly",
        "hourly_rate": "$18/hr",
        "plan": "standard",
        "addons": [],
    }
    payload.update(overrides)
    return payload
