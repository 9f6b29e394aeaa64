"""Tests for password hashing and token helpers."""

import binascii

import pytest

from picturebook.security import (
    HMAC,
    REMEMBER_TOKEN_BYTES,
    hash_password,
    n_bytes,
    random_string,
    remember_token,
    verify_password,
)


class TestPasswords:
    """Tests for bcrypt password hashing."""

    def test_hash_and_verify(self):
        hashed = hash_password("secret-password")
        assert hashed != "secret-password"
        assert verify_password("secret-password", hashed)
        assert not verify_password("other-password", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_unrecognised_hash(self):
        with pytest.raises(ValueError):
            verify_password("secret-password", "plaintext")


class TestHMAC:
    """Tests for keyed token hashing."""

    def test_deterministic(self):
        assert HMAC("key").hash("token") == HMAC("key").hash("token")

    def test_key_changes_hash(self):
        assert HMAC("key").hash("token") != HMAC("other-key").hash("token")

    def test_hash_is_url_safe_base64_of_sha256(self):
        assert n_bytes(HMAC("key").hash("token")) == 32


class TestTokens:
    """Tests for random tokens."""

    def test_remember_token_length(self):
        assert n_bytes(remember_token()) == REMEMBER_TOKEN_BYTES

    def test_remember_tokens_differ(self):
        assert remember_token() != remember_token()

    def test_random_string_length(self):
        assert n_bytes(random_string(16)) == 16

    def test_malformed_token(self):
        with pytest.raises(binascii.Error):
            n_bytes("abc")

    def test_non_ascii_token(self):
        with pytest.raises(ValueError):
            n_bytes("tökén")
