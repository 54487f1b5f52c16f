"""
Shared fixtures: in-memory SQLite engine, session, API client and users.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import User, UserRole  # noqa: F401  registers tables on Base.metadata
from app.utils.security import hash_password, create_access_token

TEST_PASSWORD = "Password123"

# bcrypt is slow on purpose; hash once for every fixture user
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session for arranging data and asserting on stored rows"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client whose requests use the in-memory database"""
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
def make_user(db):
    def _make(username: str, role: str = UserRole.USER.value, full_name: str = None, email: str = None) -> User:
        user = User(
            full_name=full_name or username.title(),
            username=username,
            email=email or f"{username}@example.com",
            hashed_password=TEST_PASSWORD_HASH,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = create_access_token(data={"sub": user.id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def alice(make_user):
    return make_user("alice", full_name="Alice Smith")


@pytest.fixture
def bob(make_user):
    return make_user("bob", full_name="Bob Jones")


@pytest.fixture
def carol(make_user):
    return make_user("carol", full_name="Carol White")


@pytest.fixture
def mallory(make_user):
    return make_user("mallory", full_name="Mallory Black")


@pytest.fixture
def admin(make_user):
    return make_user("root", role=UserRole.ADMIN.value, full_name="Site Admin")
