import os

# Must be set before the app reads its settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.database import Base, build_engine, get_db
from app.main import app
from app.services import AuthService, TodoService

engine_test = build_engine("sqlite://", poolclass=StaticPool)
SessionTest = sessionmaker(bind=engine_test, autoflush=False, expire_on_commit=False)

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine_test)
    session = SessionTest()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine_test)

@pytest.fixture
def auth_service():
    return AuthService()

@pytest.fixture
def todo_service():
    return TodoService()

@pytest.fixture
def alice(db, auth_service):
    return auth_service.register(db, "alice", "alice-pass")

@pytest.fixture
def bob(db, auth_service):
    return auth_service.register(db, "bob", "bob-pass")

@pytest.fixture
def bearer():
    def headers_for(user):
        return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}
    return headers_for

@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
