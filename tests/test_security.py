"""Unit tests for gatekeeper.core.security: bcrypt password hashing and JWT session tokens."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from gatekeeper.core.security import (
    PasswordHasher,
    SessionClaims,
    TokenInvalid,
    TokenService,
)
from gatekeeper.models.user import Role

from support import FAST_ROUNDS, TEST_SECRET


def _claims(role: Role = Role.ADMIN) -> SessionClaims:
    return SessionClaims(user_id=7, email="ada@acme.io", role=role)


class TestPasswordHasher(unittest.TestCase):
    """hash/verify round trips, salting, and fail-closed verification."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=FAST_ROUNDS)

    def test_verify_accepts_same_password(self) -> None:
        hashed = self.hasher.hash("s3cret-pass")
        self.assertTrue(self.hasher.verify("s3cret-pass", hashed))

    def test_verify_rejects_other_password(self) -> None:
        hashed = self.hasher.hash("s3cret-pass")
        self.assertFalse(self.hasher.verify("s3cret-pasS", hashed))
        self.assertFalse(self.hasher.verify("other", hashed))

    def test_same_password_hashes_differently(self) -> None:
        first = self.hasher.hash("repeatable")
        second = self.hasher.hash("repeatable")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("repeatable", first))
        self.assertTrue(self.hasher.verify("repeatable", second))

    def test_hash_is_not_plaintext_and_uses_rounds(self) -> None:
        hashed = self.hasher.hash("plain-text-pw")
        self.assertNotIn("plain-text-pw", hashed)
        self.assertTrue(hashed.startswith("$2b$04$"))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(self.hasher.verify("pw", "not-a-bcrypt-hash"))
        self.assertFalse(self.hasher.verify("pw", ""))
        self.assertFalse(self.hasher.verify("", self.hasher.hash("pw1234")))

    def test_dummy_hash_is_stable_and_rejects_guesses(self) -> None:
        dummy = self.hasher.dummy_hash
        self.assertIs(dummy, self.hasher.dummy_hash)
        self.assertFalse(self.hasher.verify("password", dummy))

    def test_non_ascii_password(self) -> None:
        hashed = self.hasher.hash("pässwörd-ü")
        self.assertTrue(self.hasher.verify("pässwörd-ü", hashed))
        self.assertFalse(self.hasher.verify("passwort-u", hashed))


class TestTokenServiceRoundTrip(unittest.TestCase):
    """issue() followed by verify() inside the ttl window returns the claims."""

    def test_round_trip(self) -> None:
        tokens = TokenService(TEST_SECRET)
        token = tokens.issue(_claims(), ttl=timedelta(hours=1))
        claims = tokens.verify(token)
        self.assertEqual(claims.user_id, 7)
        self.assertEqual(claims.email, "ada@acme.io")
        self.assertEqual(claims.role, Role.ADMIN)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=1))

    def test_default_ttl_used_when_not_given(self) -> None:
        tokens = TokenService(TEST_SECRET, default_ttl=timedelta(minutes=5))
        claims = tokens.verify(tokens.issue(_claims(Role.REGULAR)))
        self.assertEqual(claims.role, Role.REGULAR)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(minutes=5))

    def test_token_is_header_safe(self) -> None:
        token = TokenService(TEST_SECRET).issue(_claims())
        self.assertEqual(token.count("."), 2)
        self.assertNotIn(" ", token)

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenService("")


class TestTokenServiceRejects(unittest.TestCase):
    """Every kind of bad token raises the same TokenInvalid."""

    def setUp(self) -> None:
        self.tokens = TokenService(TEST_SECRET)

    def _assert_invalid(self, token: str) -> TokenInvalid:
        with self.assertRaises(TokenInvalid) as ctx:
            self.tokens.verify(token)
        return ctx.exception

    def test_expired_token(self) -> None:
        two_hours_ago = datetime.now(UTC) - timedelta(hours=2)
        issuer = TokenService(TEST_SECRET, clock=lambda: two_hours_ago)
        token = issuer.issue(_claims(), ttl=timedelta(hours=1))
        self._assert_invalid(token)

    def test_token_from_other_secret(self) -> None:
        other = TokenService("another-secret-0123456789abcdef-xyz")
        self._assert_invalid(other.issue(_claims()))

    def test_tampered_payload(self) -> None:
        token = self.tokens.issue(_claims(Role.REGULAR))
        header, payload, signature = token.split(".")
        data = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
        data["role"] = "Admin"
        forged = base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()
        self._assert_invalid(f"{header}.{forged}.{signature}")

    def test_garbage_and_empty(self) -> None:
        self._assert_invalid("not.a.jwt")
        self._assert_invalid("garbage")
        self._assert_invalid("")

    def test_unsigned_token(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "7", "email": "ada@acme.io", "role": "Admin", "iat": now, "exp": now + timedelta(hours=1)},
            None,
            algorithm="none",
        )
        self._assert_invalid(token)

    def _signed(self, payload: dict) -> str:
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    def test_missing_claim(self) -> None:
        now = datetime.now(UTC)
        token = self._signed({"sub": "7", "role": "Admin", "iat": now, "exp": now + timedelta(hours=1)})
        self._assert_invalid(token)

    def test_unknown_role(self) -> None:
        now = datetime.now(UTC)
        token = self._signed(
            {"sub": "7", "email": "ada@acme.io", "role": "Root", "iat": now, "exp": now + timedelta(hours=1)}
        )
        self._assert_invalid(token)

    def test_non_numeric_subject(self) -> None:
        now = datetime.now(UTC)
        token = self._signed(
            {"sub": "ada", "email": "ada@acme.io", "role": "Admin", "iat": now, "exp": now + timedelta(hours=1)}
        )
        self._assert_invalid(token)

    def test_expiry_follows_service_clock(self) -> None:
        now = [datetime.now(UTC)]
        tokens = TokenService(TEST_SECRET, clock=lambda: now[0])
        token = tokens.issue(_claims(), ttl=timedelta(hours=1))
        now[0] += timedelta(minutes=59)
        self.assertEqual(tokens.verify(token).user_id, 7)
        now[0] += timedelta(minutes=2)
        with self.assertRaises(TokenInvalid):
            tokens.verify(token)

    def test_future_clock_accepts_its_own_tokens(self) -> None:
        later = datetime.now(UTC) + timedelta(hours=3)
        tokens = TokenService(TEST_SECRET, clock=lambda: later)
        claims = tokens.verify(tokens.issue(_claims(), ttl=timedelta(hours=1)))
        self.assertEqual(claims.issued_at, later.replace(microsecond=0))

    def test_failures_share_one_message(self) -> None:
        two_hours_ago = datetime.now(UTC) - timedelta(hours=2)
        expired = TokenService(TEST_SECRET, clock=lambda: two_hours_ago).issue(_claims(), ttl=timedelta(hours=1))
        forged = TokenService("another-secret-0123456789abcdef-xyz").issue(_claims())
        self.assertEqual(self._assert_invalid(expired).message, self._assert_invalid(forged).message)


if __name__ == "__main__":
    unittest.main()
