import os

# settings are read at import time, so the test database must be chosen first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test"

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db.init_db import create_all_tables, drop_all_tables
from app.db.session import SessionLocal
from app.main import app
from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User


@pytest.fixture(autouse=True)
def _tables():
    create_all_tables()
    yield
    drop_all_tables()


@pytest.fixture()
def seed():
    # u2 owns every post so u1 and u3 trigger notifications on them
    s = SessionLocal()
    try:
        for uid in ("u1", "u2", "u3"):
            s.add(User(id=uid, username=f"user_{uid}", name=f"User {uid}", email=f"{uid}@bubbly.test"))
        s.add(Post(id="p1", user_id="u2", content="First post", audience="Public"))
        s.add(Post(id="p2", user_id="u2", content="Second post", audience="Public"))
        s.add(Post(id="p_private", user_id="u2", content="Just for me", audience="OnlyMe"))
        s.commit()
    finally:
        s.close()


@pytest.fixture()
def db(seed):
    s = SessionLocal()
    yield s
    s.close()


@pytest.fixture()
def client(seed):
    return TestClient(app)


@pytest.fixture()
def auth():
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers
