"""Unit tests for incident_desk.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from incident_desk.core.config import settings
from incident_desk.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from incident_desk.schemas.auth import RoleName


def _encode(payload: dict, secret: str | None = None) -> str:
    return jwt.encode(
        payload,
        secret or settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


class TestPasswordHashing(unittest.TestCase):
    """hash_password salts every digest; verify_password checks deterministically."""

    def test_verify_accepts_correct_password(self) -> None:
        digest = hash_password("secret1")
        self.assertTrue(verify_password("secret1", digest))

    def test_verify_rejects_wrong_password(self) -> None:
        digest = hash_password("secret1")
        self.assertFalse(verify_password("secret2", digest))

    def test_digest_is_salted(self) -> None:
        self.assertNotEqual(hash_password("secret1"), hash_password("secret1"))

    def test_digest_uses_configured_cost(self) -> None:
        digest = hash_password("secret1")
        self.assertTrue(digest.startswith(f"$2b${settings.BCRYPT_ROUNDS:02d}$"))

    def test_malformed_digest_is_rejected_not_raised(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token round trip and rejection paths."""

    def test_claims_survive_round_trip(self) -> None:
        token = create_access_token(7, [RoleName.USER, RoleName.ADMIN])
        claims = decode_access_token(token)
        self.assertEqual(claims.id, 7)
        self.assertEqual(claims.roles, [RoleName.USER, RoleName.ADMIN])
        self.assertEqual(claims.exp - claims.iat, settings.JWT_EXPIRE_SECONDS)

    def test_payload_has_id_roles_iat_exp(self) -> None:
        token = create_access_token(3, [RoleName.MODERATOR], expires_seconds=120)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(set(payload), {"id", "roles", "iat", "exp"})
        self.assertEqual(payload["roles"], ["moderator"])

    def test_expired_token_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode(
            {
                "id": 1,
                "roles": ["user"],
                "iat": now - timedelta(hours=25),
                "exp": now - timedelta(hours=1),
            }
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_wrong_signature_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode(
            {"id": 1, "roles": ["admin"], "iat": now, "exp": now + timedelta(hours=1)},
            secret="some-other-secret",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_tampered_payload_is_rejected(self) -> None:
        token = create_access_token(1, [RoleName.USER])
        header, _payload, signature = token.split(".")
        forged = _encode(
            {"id": 1, "roles": ["admin"], "iat": 0, "exp": 4102444800}
        ).split(".")[1]
        with self.assertRaises(InvalidTokenError):
            decode_access_token(f"{header}.{forged}.{signature}")

    def test_garbage_is_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            decode_access_token("not.a.token")

    def test_unknown_role_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode(
            {"id": 1, "roles": ["superuser"], "iat": now, "exp": now + timedelta(hours=1)}
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_empty_roles_are_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode({"id": 1, "roles": [], "iat": now, "exp": now + timedelta(hours=1)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_id_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode({"roles": ["user"], "iat": now, "exp": now + timedelta(hours=1)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_empty_role_list_cannot_be_issued(self) -> None:
        with self.assertRaises(ValueError):
            create_access_token(1, [])

    def test_missing_exp_is_rejected(self) -> None:
        token = _encode({"id": 1, "roles": ["user"], "iat": datetime.now(UTC)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
