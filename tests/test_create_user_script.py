"""Tests for the create_user bootstrap command."""

import unittest

from support import DatabaseTestCase

from poseidon.core.security import verify_password
from poseidon.models import User
from poseidon.scripts.create_user import main


class TestCreateUserScript(DatabaseTestCase):
    def test_creates_admin(self) -> None:
        self.assertEqual(main(["admin", "S3cure!pass", "Administrator", "admin"]), 0)
        self.db.expire_all()
        user = self.db.query(User).one()
        self.assertEqual((user.username, user.role), ("admin", "admin"))
        self.assertTrue(verify_password("S3cure!pass", user.password_hash))

    def test_role_defaults_to_user(self) -> None:
        self.assertEqual(main(["jdoe", "S3cure!pass", "John Doe"]), 0)
        self.db.expire_all()
        self.assertEqual(self.db.query(User).one().role, "user")

    def test_weak_password_rejected(self) -> None:
        self.assertEqual(main(["jdoe", "password", "John Doe"]), 1)
        self.assertEqual(self.count(User), 0)

    def test_duplicate_rejected(self) -> None:
        main(["jdoe", "S3cure!pass", "John Doe"])
        self.assertEqual(main(["jdoe", "Other#pass1", "Someone Else"]), 1)
        self.assertEqual(self.count(User), 1)


if __name__ == "__main__":
    unittest.main()
