"""Unit tests for password hashing and verification

Tests cover:
- Password hashing with Argon2id
- Password verification
- Pepper handling
"""

import pytest

from auth.password import hash_password, verify_password


class TestHashPassword:
    """Test password hashing functionality"""

    def test_hash_password_argon2id_format(self, monkeypatch):
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        hashed = hash_password("SecureP@ss123")

        assert hashed.startswith('$argon2id$')
        assert 'p=4' in hashed

    def test_hash_password_different_for_same_input(self, monkeypatch):
        """Test same password produces different hashes (due to random salt)"""
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        assert hash_password("SecureP@ss123") != hash_password("SecureP@ss123")

    def test_hash_password_without_pepper_raises_error(self, monkeypatch):
        monkeypatch.delenv('PASSWORD_PEPPER', raising=False)

        with pytest.raises(ValueError, match="PASSWORD_PEPPER environment variable is not set"):
            hash_password("SecureP@ss123")

    def test_hash_password_empty_raises_error(self, monkeypatch):
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        with pytest.raises(ValueError, match="Password cannot be empty"):
            hash_password("")


class TestVerifyPassword:
    """Test password verification functionality"""

    def test_verify_password_correct(self, monkeypatch):
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        hashed = hash_password("SecureP@ss123")

        assert verify_password("SecureP@ss123", hashed) is True

    def test_verify_password_incorrect(self, monkeypatch):
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        hashed = hash_password("SecureP@ss123")

        assert verify_password("WrongP@ss456", hashed) is False

    def test_verify_password_with_other_pepper_fails(self, monkeypatch):
        monkeypatch.setenv('PASSWORD_PEPPER', 'pepper-one')
        hashed = hash_password("SamePassword123!")

        monkeypatch.setenv('PASSWORD_PEPPER', 'pepper-two')
        assert verify_password("SamePassword123!", hashed) is False

    @pytest.mark.parametrize("password,hashed", [
        ("", "$argon2id$whatever"),
        ("SecureP@ss123", ""),
        ("SecureP@ss123", "not-a-hash"),
    ])
    def test_verify_password_malformed_input_returns_false(self, monkeypatch, password, hashed):
        monkeypatch.setenv('PASSWORD_PEPPER', 'test-pepper-secret')

        assert verify_password(password, hashed) is False
