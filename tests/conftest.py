"""
Shared fixtures: SQLite test database, test client, app/event factories
"""
import os

# Must be set before pixeltrack reads its settings
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("FACEBOOK_APP_ID", "fb-app-id")
os.environ.setdefault("FACEBOOK_APP_SECRET", "fb-app-secret")

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pixeltrack.main import app as fastapi_app
from pixeltrack.core.database import Base, get_db
from pixeltrack.models.app import App, AppSettings
from pixeltrack.models.event import Event
from pixeltrack.models.custom_event import CustomEvent


SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing"""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


fastapi_app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create test client"""
    return TestClient(fastapi_app)


@pytest.fixture
def make_app(db_session):
    """Factory for apps with a settings row"""
    counter = {"n": 0}

    def _make(user_id="shop.myshopify.com", name=None, created_at=None, **settings_fields):
        counter["n"] += 1
        app = App(
            app_id=f"app{counter['n']:013d}",
            user_id=user_id,
            name=name or f"Test App {counter['n']}",
        )
        if created_at is not None:
            app.created_at = created_at
        app.settings = AppSettings(**settings_fields)
        db_session.add(app)
        db_session.commit()
        db_session.refresh(app)
        return app

    return _make


@pytest.fixture
def test_app(make_app):
    return make_app()


@pytest.fixture
def make_event(db_session):
    """Factory for events with explicit timestamps so ordering is deterministic"""
    base_time = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def _make(app, event_name="pageview", minutes=0, **fields):
        created_at = fields.pop("created_at", base_time + timedelta(minutes=minutes))
        event = Event(
            app_id=app.id,
            event_name=event_name,
            created_at=created_at,
            **fields,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make


@pytest.fixture
def make_custom_event(db_session):
    def _make(app, name="add_to_cart", selector=".add-to-cart", is_active=True, **fields):
        display_name = fields.pop("display_name", name.replace("_", " ").title())
        custom_event = CustomEvent(
            app_id=app.id,
            name=name,
            display_name=display_name,
            selector=selector,
            is_active=is_active,
            **fields,
        )
        db_session.add(custom_event)
        db_session.commit()
        db_session.refresh(custom_event)
        return custom_event

    return _make
