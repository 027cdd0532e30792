"""Shared base classes and factories for database and web tests."""

import unittest

from fastapi.testclient import TestClient

from poseidon.core.database import SessionLocal, engine
from poseidon.core.security import hash_password
from poseidon.main import app
from poseidon.models import Base, User

ADMIN_PASSWORD = "Admin#123"
USER_PASSWORD = "User#1234"


def make_user(db, username: str, password: str, role: str = "user", fullname: str = "") -> User:
    """Insert a user with a hashed password and return it."""
    user = User(
        username=username,
        password_hash=hash_password(password),
        fullname=fullname or username.title(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test on the in-memory database."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def count(self, model) -> int:
        self.db.expire_all()
        return self.db.query(model).count()


class WebTestCase(DatabaseTestCase):
    """Database plus a TestClient and one admin and one plain user."""

    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)
        self.admin = make_user(self.db, "admin", ADMIN_PASSWORD, role="admin", fullname="Administrator")
        self.user = make_user(self.db, "jdoe", USER_PASSWORD, role="user", fullname="John Doe")

    def tearDown(self) -> None:
        self.client.close()
        super().tearDown()

    def login(self, username: str, password: str):
        return self.client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )

    def login_admin(self):
        return self.login("admin", ADMIN_PASSWORD)

    def login_user(self):
        return self.login("jdoe", USER_PASSWORD)
