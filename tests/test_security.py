"""Unit tests for app.core.security: scrypt hash layout and session tokens."""

import unittest
from datetime import timedelta

import jwt

from app.core.security import (
    KEY_HEX_LEN,
    SALT_HEX_LEN,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

CLAIMS = {
    "id": "6f1c2a9e-4f53-4f0c-9d4e-0d8f1b7a2c11",
    "email": "ada@mailbox.org",
    "first_name": "Ada",
    "last_name": "Lovelace",
}


class TestHashLayout(unittest.TestCase):
    """Stored hash is 64 hex chars of key followed by 32 hex chars of salt."""

    def test_length_and_hex(self) -> None:
        hashed = hash_password("correct horse battery")
        self.assertEqual(len(hashed), KEY_HEX_LEN + SALT_HEX_LEN)
        self.assertEqual(len(hashed), 96)
        int(hashed, 16)

    def test_salt_is_random(self) -> None:
        a = hash_password("same-password")
        b = hash_password("same-password")
        self.assertNotEqual(a, b)
        self.assertNotEqual(a[KEY_HEX_LEN:], b[KEY_HEX_LEN:])


class TestVerifyPassword(unittest.TestCase):
    def test_round_trip(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertTrue(verify_password("s3cret-password", hashed))

    def test_wrong_password(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertFalse(verify_password("s3cret-passwore", hashed))

    def test_salt_comes_from_suffix(self) -> None:
        hashed = hash_password("s3cret-password")
        other_salt = hash_password("s3cret-password")[KEY_HEX_LEN:]
        self.assertFalse(verify_password("s3cret-password", hashed[:KEY_HEX_LEN] + other_salt))

    def test_malformed_hash(self) -> None:
        self.assertFalse(verify_password("anything", ""))
        self.assertFalse(verify_password("anything", "abc123"))


class TestSessionToken(unittest.TestCase):
    def test_round_trip_carries_claims(self) -> None:
        token = create_access_token(CLAIMS)
        payload = decode_access_token(token)
        for key, value in CLAIMS.items():
            self.assertEqual(payload[key], value)
        self.assertIn("exp", payload)
        self.assertIn("iat", payload)

    def test_default_lifetime_is_a_day(self) -> None:
        payload = decode_access_token(create_access_token(CLAIMS))
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(CLAIMS, expires_delta=timedelta(seconds=-10))
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(CLAIMS)
        header, _payload, signature = token.split(".")
        forged = jwt.encode({**CLAIMS, "exp": 4102444800}, "not-the-secret", algorithm="HS256")
        forged_payload = forged.split(".")[1]
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(f"{header}.{forged_payload}.{signature}")

    def test_token_without_exp_rejected(self) -> None:
        from app.core.config import settings

        token = jwt.encode(
            CLAIMS,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
