"""Shared fixtures for API tests: in-memory SQLite store and a TestClient bound to it."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, Role, SessionToken, User

DEFAULT_PASSWORD = "Password123"


def make_session_factory() -> tuple[object, sessionmaker]:
    """Fresh in-memory database shared across threads (StaticPool) with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, autocommit=False, autoflush=False)


class DatabaseTestCase(unittest.TestCase):
    """Provides self.db backed by a fresh in-memory database per test."""

    def setUp(self) -> None:
        self.engine, self.SessionLocal = make_session_factory()
        self.db: Session = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def create_user(
        self,
        email: str,
        password: str = DEFAULT_PASSWORD,
        role: str = Role.USER.value,
        name: str = "Test Person",
        deleted: bool = False,
    ) -> int:
        """Insert a user directly in the store and return its id."""
        db = self.SessionLocal()
        try:
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password, get_settings().BCRYPT_ROUNDS),
                role=role,
                deleted=deleted,
            )
            db.add(user)
            db.commit()
            return user.id
        finally:
            db.close()

    def fetch_user(self, user_id: int) -> User:
        db = self.SessionLocal()
        try:
            return db.query(User).filter(User.id == user_id).one()
        finally:
            db.close()

    def session_rows(self, user_id: int) -> list[SessionToken]:
        db = self.SessionLocal()
        try:
            return (
                db.query(SessionToken)
                .filter(SessionToken.user_id == user_id)
                .order_by(SessionToken.id)
                .all()
            )
        finally:
            db.close()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db dependency uses the test store."""

    def setUp(self) -> None:
        super().setUp()

        def _get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        super().tearDown()

    def new_client(self, **kwargs: object) -> TestClient:
        """Separate client with its own (empty) cookie jar."""
        client = TestClient(app, **kwargs)
        self.addCleanup(client.close)
        return client

    def login(
        self,
        email: str,
        password: str = DEFAULT_PASSWORD,
        client: TestClient | None = None,
    ):
        return (client or self.client).post(
            "/api/auth/login", json={"email": email, "password": password}
        )

    def login_as(self, email: str, role: str = Role.USER.value) -> tuple[int, TestClient]:
        """Create a user, log in with a fresh client and return (user_id, client)."""
        user_id = self.create_user(email, role=role)
        client = self.new_client()
        resp = self.login(email, client=client)
        self.assertEqual(resp.status_code, 200, resp.text)
        return user_id, client
