from datetime import datetime, timedelta

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from snuggle.database import Base, get_db
from snuggle.main import app
from snuggle.models import Blog, Profile
from snuggle.redis_client import get_redis
from snuggle.services import auth_service
from snuggle.services.auth_service import AuthUser

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Tokens válidos en los tests: "token-<user_id>"
TOKEN_PREFIX = "token-"


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {TOKEN_PREFIX}{user_id}"}


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def user_metadata():
    """Metadatos que devuelve el proveedor de identidad, por usuario."""
    return {}


@pytest.fixture
def client(db_session, redis_client, user_metadata, monkeypatch):
    async def fake_get_user(token):
        if not token.startswith(TOKEN_PREFIX):
            return None
        user_id = token[len(TOKEN_PREFIX):]
        return AuthUser(
            id=user_id,
            email=f"{user_id}@example.com",
            user_metadata=user_metadata.get(user_id, {}),
        )

    monkeypatch.setattr(auth_service, "get_user", fake_get_user)
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_redis] = lambda: redis_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_blog(db_session):
    counter = {"n": 0}

    def _make_blog(user_id="owner", name=None, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("created_at", datetime(2024, 1, 1) + timedelta(minutes=counter["n"]))
        blog = Blog(user_id=user_id, name=name or f"Blog {counter['n']}", **kwargs)
        db_session.add(blog)
        db_session.commit()
        db_session.refresh(blog)
        return blog

    return _make_blog


@pytest.fixture
def make_profile(db_session):
    def _make_profile(user_id, nickname=None, profile_image_url=None):
        profile = Profile(id=user_id, nickname=nickname, profile_image_url=profile_image_url)
        db_session.add(profile)
        db_session.commit()
        return profile

    return _make_profile
