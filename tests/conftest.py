import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskhub.database import Base, get_db
from taskhub.models.user import User
from taskhub.utils.security import create_access_token, hash_password

PASSWORD = "secret123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_user(db, name, email, role="user"):
    user = User(name=name, email=email, hashed_password=hash_password(PASSWORD), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(db):
    return make_user(db, "Ada Admin", "ada@example.com", "admin")


@pytest.fixture
def manager(db):
    return make_user(db, "Max Manager", "max@example.com", "manager")


@pytest.fixture
def other_manager(db):
    return make_user(db, "Mia Manager", "mia@example.com", "manager")


@pytest.fixture
def member(db):
    return make_user(db, "Uma User", "uma@example.com", "user")


@pytest.fixture
def create_project(client):
    def _create(actor, title="Site Revamp", members=None, **extra):
        body = {"title": title, "members": [str(m.id) for m in (members or [])], **extra}
        response = client.post("/api/projects", json=body, headers=auth_headers(actor))
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_task(client):
    def _create(actor, project_id, title="Design mockups", **extra):
        body = {"title": title, "projectId": project_id, **extra}
        response = client.post("/api/tasks", json=body, headers=auth_headers(actor))
        assert response.status_code == 201, response.text
        return response.json()
    return _create
