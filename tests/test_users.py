"""Tests for the credential store: registration, duplicate detection and role assignment."""

import unittest
from unittest.mock import patch

from db_support import SQLiteDatabase

from incident_desk.core.security import verify_password
from incident_desk.models import Role, User
from incident_desk.schemas.auth import RoleName
from incident_desk.services.users import (
    DuplicateUserError,
    RolesNotSeededError,
    find_by_username,
    register_user,
    role_names_of,
)


class TestRegisterUser(unittest.TestCase):
    def setUp(self) -> None:
        self.database = SQLiteDatabase()
        self.db = self.database.session()

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()

    def test_stores_hash_not_plaintext(self) -> None:
        user = register_user(self.db, "alice", "a@x.com", "secret1")
        self.assertNotEqual(user.password_hash, "secret1")
        self.assertTrue(verify_password("secret1", user.password_hash))

    def test_default_role_is_user(self) -> None:
        user = register_user(self.db, "alice", "a@x.com", "secret1")
        self.assertEqual(role_names_of(user), [RoleName.USER])

    def test_empty_role_list_still_gets_default(self) -> None:
        user = register_user(self.db, "alice", "a@x.com", "secret1", roles=[])
        self.assertEqual(role_names_of(user), [RoleName.USER])

    def test_requested_roles_are_assigned_in_id_order(self) -> None:
        user = register_user(
            self.db, "boss", "b@x.com", "secret1", roles=[RoleName.ADMIN, RoleName.MODERATOR]
        )
        self.assertEqual(role_names_of(user), [RoleName.MODERATOR, RoleName.ADMIN])

    def test_duplicate_username_is_rejected(self) -> None:
        register_user(self.db, "alice", "a@x.com", "secret1")
        with self.assertRaises(DuplicateUserError) as ctx:
            register_user(self.db, "alice", "other@x.com", "secret1")
        self.assertEqual(ctx.exception.field, "username")
        self.assertEqual(self.db.query(User).count(), 1)

    def test_duplicate_email_is_rejected(self) -> None:
        register_user(self.db, "alice", "a@x.com", "secret1")
        with self.assertRaises(DuplicateUserError) as ctx:
            register_user(self.db, "alicia", "a@x.com", "secret1")
        self.assertEqual(ctx.exception.field, "email")

    def test_unique_constraint_clash_is_reported_as_duplicate(self) -> None:
        register_user(self.db, "alice", "a@x.com", "secret1")
        with patch("incident_desk.services.users._check_duplicates"):
            with self.assertRaises(DuplicateUserError) as ctx:
                register_user(self.db, "alicia", "a@x.com", "secret1")
        self.assertIsNone(ctx.exception.field)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_find_by_username(self) -> None:
        created = register_user(self.db, "alice", "a@x.com", "secret1")
        self.assertEqual(find_by_username(self.db, "alice").id, created.id)
        self.assertIsNone(find_by_username(self.db, "bob"))


class TestRegisterWithoutSeededRoles(unittest.TestCase):
    def setUp(self) -> None:
        self.database = SQLiteDatabase(seed=False)
        self.db = self.database.session()

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()

    def test_missing_role_rows_roll_back_the_user(self) -> None:
        with self.assertRaises(RolesNotSeededError):
            register_user(self.db, "alice", "a@x.com", "secret1")
        self.assertEqual(self.db.query(User).count(), 0)
        self.assertEqual(self.db.query(Role).count(), 0)


if __name__ == "__main__":
    unittest.main()
