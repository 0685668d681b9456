"""Tests for Argon2id hashing with legacy SHA-256 upgrade."""

import pytest

from app.managers.password_manager import (
    PasswordHasher,
    hash_password,
    legacy_digest,
    verify_and_update_password,
    verify_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher("low")


class TestPasswordHasher:
    """Test cases for PasswordHasher."""

    def test_hash_is_argon2id(self, hasher: PasswordHasher) -> None:
        digest = hasher.hash("s3cret-pass")
        assert digest.startswith("$argon2id$")
        assert hasher.verify("s3cret-pass", digest)
        assert not hasher.verify("wrong-pass", digest)

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("s3cret-pass") != hasher.hash("s3cret-pass")

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="Password cannot be empty"):
            hasher.hash("")

    def test_legacy_digest_verifies(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("s3cret-pass", legacy_digest("s3cret-pass"))
        assert not hasher.verify("other", legacy_digest("s3cret-pass"))

    @pytest.mark.parametrize("stored", ["", "   ", "not-a-hash", "$argon2id$broken"])
    def test_malformed_digest_is_false(self, hasher: PasswordHasher, stored: str) -> None:
        assert hasher.verify("s3cret-pass", stored) is False


class TestVerifyAndUpdate:
    """Test cases for transparent digest upgrades."""

    def test_legacy_digest_is_upgraded(self, hasher: PasswordHasher) -> None:
        valid, new_hash = hasher.verify_and_update("s3cret-pass", legacy_digest("s3cret-pass"))
        assert valid is True
        assert new_hash is not None
        assert new_hash.startswith("$argon2id$")
        assert hasher.verify("s3cret-pass", new_hash)

    def test_wrong_password_on_legacy_digest(self, hasher: PasswordHasher) -> None:
        assert hasher.verify_and_update("nope", legacy_digest("s3cret-pass")) == (False, None)

    def test_current_digest_needs_no_update(self, hasher: PasswordHasher) -> None:
        digest = hasher.hash("s3cret-pass")
        assert hasher.verify_and_update("s3cret-pass", digest) == (True, None)

    def test_missing_digest(self, hasher: PasswordHasher) -> None:
        assert hasher.verify_and_update("s3cret-pass", None) == (False, None)


async def test_async_helpers_round_trip() -> None:
    digest = await hash_password("s3cret-pass")
    assert await verify_password("s3cret-pass", digest)
    assert await verify_and_update_password("s3cret-pass", digest) == (True, None)
