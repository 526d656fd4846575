"""Tests for password hashing."""

import pytest

from core.logging import mask_email
from core.security import hash_password


@pytest.mark.unit
class TestPasswordHashing:
    """Tests for hash_password."""

    def test_hash_format(self):
        hashed = hash_password("correct horse", salt="abc")
        algorithm, iterations, salt, digest = hashed.split("$")

        assert algorithm == "pbkdf2_sha256"
        assert int(iterations) > 100_000
        assert salt == "abc"
        assert len(digest) == 64

    def test_random_salt(self):
        assert hash_password("correct horse") != hash_password("correct horse")

    def test_same_salt_is_deterministic(self):
        assert hash_password("correct horse", salt="abc") == hash_password("correct horse", salt="abc")
        assert hash_password("wrong horse", salt="abc") != hash_password("correct horse", salt="abc")


@pytest.mark.unit
class TestMaskEmail:
    """Tests for log masking of addresses."""

    def test_masks_address(self):
        assert mask_email("resident@example.com") == "res***"

    def test_passes_through_empty(self):
        assert mask_email(None) is None
        assert mask_email("") == ""
