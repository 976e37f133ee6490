import os

# Must be set before vivafit.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vivafit.auth import get_session_info
from vivafit.database import Base, get_db
from vivafit.domain.identity.schemas import SessionInfo
from vivafit.main import app
from vivafit.models import Consultation, Role

from .factories import actor_for, make_account


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


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
def client_account(db):
    return make_account(db, "client-1", "Carla Client", "carla@example.com", Role.CLIENT)


@pytest.fixture
def other_client_account(db):
    return make_account(db, "client-2", "Otto Other", "otto@example.com", Role.CLIENT)


@pytest.fixture
def professional_account(db):
    return make_account(db, "pro-1", "Dr. Paula Pro", "paula@example.com", Role.PROFESSIONAL)


@pytest.fixture
def other_professional_account(db):
    return make_account(db, "pro-2", "Dr. Ana Alves", "ana@example.com", Role.PROFESSIONAL)


@pytest.fixture
def client_actor(client_account):
    return actor_for(client_account)


@pytest.fixture
def professional_actor(professional_account):
    return actor_for(professional_account)


@pytest.fixture
def make_consultation(db):
    """Insert a consultation directly, bypassing the service layer"""

    def _make(client, professional, scheduled_date=date(2025, 6, 1), scheduled_time="14:00", **kwargs):
        consultation = Consultation(
            client_id=client.id,
            professional_id=professional.id,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            **kwargs,
        )
        db.add(consultation)
        db.commit()
        db.refresh(consultation)
        return consultation

    return _make


class SessionState:
    """Stands in for the identity provider: whoever logs in is the caller"""

    def __init__(self):
        self.session = None

    def login(self, account_id, email=None, name=None):
        self.session = SessionInfo(account_id=account_id, email=email, name=name)

    def login_as(self, account):
        self.login(account.id, email=account.email)

    def logout(self):
        self.session = None


@pytest.fixture
def auth_session():
    return SessionState()


@pytest.fixture
def api(session_factory, auth_session):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_get_session_info():
        return auth_session.session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_info] = override_get_session_info
    yield TestClient(app)
    app.dependency_overrides.clear()

