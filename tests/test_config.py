"""Tests for Settings validation (incident_desk.core.config)."""

import unittest

from pydantic import ValidationError

from incident_desk.core.config import Settings


def _settings(**overrides: object) -> Settings:
    # _env_file=None keeps a developer's local .env out of the assertions.
    return Settings(_env_file=None, **overrides)


class TestSettingsDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.API_PREFIX, "/api")
        self.assertEqual(s.DB_POOL_SIZE, 5)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.JWT_EXPIRE_SECONDS, 86400)
        self.assertEqual(s.BCRYPT_ROUNDS, 8)
        self.assertFalse(s.STATS_REQUIRE_AUTH)

    def test_default_database_url_names_the_psycopg2_driver(self) -> None:
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))


class TestSettingsValidation(unittest.TestCase):
    def test_rejects_non_postgres_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/db")

    def test_rejects_empty_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_rejects_asymmetric_algorithm(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_rejects_out_of_range_pool_size(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DB_POOL_SIZE=0)

    def test_rejects_out_of_range_bcrypt_rounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)

    def test_rejects_short_token_lifetime(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_SECONDS=10)

    def test_normalizes_log_level_and_prefix(self) -> None:
        s = _settings(LOG_LEVEL="debug", API_PREFIX="/api/")
        self.assertEqual(s.LOG_LEVEL, "DEBUG")
        self.assertEqual(s.API_PREFIX, "/api")

    def test_rejects_unknown_log_level(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()
