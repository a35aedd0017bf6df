"""
Unit tests for security primitives.

Tests cover:
- bcrypt password hashing
- Security answer normalisation and salted hashing
- One-time code generation
- Access token round trip and rejection
"""

import pytest

from mindful_heaven.core.security import (
    create_access_token,
    decode_access_token,
    generate_one_time_code,
    hash_answer,
    hash_password,
    new_answer_salt,
    normalize_answer,
    verify_answer,
    verify_password,
)


class TestPasswordHashing:
    """Tests for account password hashing."""

    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)

    def test_wrong_password_is_rejected(self):
        assert not verify_password("secret124", hash_password("secret123"))

    def test_malformed_hash_is_rejected(self):
        assert not verify_password("secret123", "not-a-bcrypt-hash")


class TestSecurityAnswers:
    """Tests for security answer hashing."""

    @pytest.mark.parametrize("answer", ["Fluffy", "fluffy", " fluffy ", "FLUFFY\t"])
    def test_answers_match_ignoring_case_and_surrounding_space(self, answer):
        salt = new_answer_salt()
        stored = hash_answer("Fluffy", salt)

        assert verify_answer(answer, salt, stored)

    def test_different_answer_does_not_match(self):
        salt = new_answer_salt()

        assert not verify_answer("Rex", salt, hash_answer("Fluffy", salt))

    def test_salt_changes_the_hash(self):
        assert hash_answer("Fluffy", "a" * 32) != hash_answer("Fluffy", "b" * 32)

    def test_normalize_answer(self):
        assert normalize_answer("  New York ") == "new york"

    def test_hash_is_sha256_hex(self):
        digest = hash_answer("Fluffy", new_answer_salt())

        assert len(digest) == 64
        int(digest, 16)


class TestOneTimeCode:
    def test_six_digit_codes(self):
        for _ in range(200):
            code = generate_one_time_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_custom_length(self):
        assert len(generate_one_time_code(8)) == 8


class TestAccessTokens:
    """Tests for JWT access tokens."""

    def test_round_trip(self):
        token = create_access_token("user-1", "secret", "HS256", 5)

        assert decode_access_token(token, "secret", "HS256") == "user-1"

    def test_wrong_secret(self):
        token = create_access_token("user-1", "secret", "HS256", 5)

        assert decode_access_token(token, "other", "HS256") is None

    def test_expired_token(self):
        token = create_access_token("user-1", "secret", "HS256", -1)

        assert decode_access_token(token, "secret", "HS256") is None

    def test_garbage_token(self):
        assert decode_access_token("garbage", "secret", "HS256") is None
