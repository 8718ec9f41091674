"""
Tests for token encryption and PII hashing
"""
import hashlib

import pytest

from pixeltrack.utils.encryption import encrypt_token, decrypt_token, hash_pii


def test_encrypt_decrypt():
    encrypted = encrypt_token("EAAB-secret")
    assert encrypted != "EAAB-secret"
    assert decrypt_token(encrypted) == "EAAB-secret"


def test_empty_values_pass_through():
    assert encrypt_token(None) is None
    assert encrypt_token("") == ""
    assert decrypt_token(None) is None


def test_decrypt_garbage_raises():
    with pytest.raises(ValueError):
        decrypt_token("not-a-fernet-token")


def test_hash_pii_normalizes():
    expected = hashlib.sha256(b"jane@example.com").hexdigest()
    assert hash_pii(" Jane@Example.com ") == expected
    assert hash_pii("jane@example.com") == expected
    assert hash_pii(None) is None
