"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from medislot import config
from medislot.database import Base, build_engine, get_db
from medislot.main import app


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Keep tests away from Redis and the Expo push API."""
    monkeypatch.setattr(config, "RATE_LIMIT_ENABLED", False)
    monkeypatch.setattr(config, "PUSH_NOTIFICATIONS_ENABLED", False)
    yield


@pytest.fixture
def engine(tmp_path):
    """Fresh file-backed SQLite database; threads get their own connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'medislot_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def doctor_id():
    return "doc-1"


@pytest.fixture
def seed_availability(client, doctor_id):
    """Save availability for a doctor through the API."""
    def _seed(days, doctor=None):
        response = client.post(
            "/doctor-availability",
            json={"doctorId": doctor or doctor_id, "availability": days},
        )
        assert response.status_code == 200, response.text
        return response
    return _seed


@pytest.fixture
def booking_payload(doctor_id):
    def _create(**overrides):
        payload = {
            "patientName": "Asha Rao",
            "patientPhone": "+919876543210",
            "doctorId": doctor_id,
            "doctorName": "Meera Iyer",
            "date": "2025-03-10",
            "slot": "morning-09:00",
            "time": "09:00",
        }
        payload.update(overrides)
        return payload
    return _create
