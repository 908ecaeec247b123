import os
import tempfile

# keep the app off the developer database and media directory
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_DIR", tempfile.mkdtemp(prefix="elakitty-media-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from elakitty.crud.auth import create_session
from elakitty.db import get_db, init_db
from elakitty.main import app
from elakitty.models.enums import Role
from elakitty.models.profile import Profile
from elakitty.services.access.viewer import Viewer


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
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
def make_profile(db):
    def _make(email, role=Role.USER):
        profile = Profile(email=email, role=role)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def auth_headers(db):
    def _headers(profile):
        session = create_session(db, profile)
        return {"Authorization": f"Bearer {session.token}"}

    return _headers


@pytest.fixture
def admin(make_profile):
    return make_profile("admin@example.org", Role.ADMIN)


@pytest.fixture
def admin_viewer(admin):
    return Viewer.from_profile(admin)


def radius_payload(**overrides):
    payload = {
        "name": "Lefkas Cat Haven",
        "latitude": 38.8,
        "longitude": 20.7,
        "area_mode": "radius",
        "radius_km": 5,
    }
    payload.update(overrides)
    return payload


SQUARE = {
    "type": "Feature",
    "properties": {},
    "geometry": {
        "type": "Polygon",
        "coordinates": [
            [[20.65, 38.85], [20.75, 38.85], [20.75, 38.95], [20.65, 38.95], [20.65, 38.85]]
        ],
    },
}
