"""Tests for bearer token issuance and verification."""

from jose import jwt

from app.configs.settings import TOKEN_TTL_SECONDS
from app.managers.token_manager import ALGORITHM, issue_token, verify_token

SECRET = "unit-test-secret"
NOW = 1_700_000_000
CLAIMS = {"userId": 7, "email": "admin@example.com", "role": "admin"}


class TestIssueToken:
    """Test cases for issue_token."""

    def test_has_three_segments(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        assert token.count(".") == 2

    def test_expires_after_24_hours(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        payload = jwt.get_unverified_claims(token)
        assert payload["exp"] == NOW + TOKEN_TTL_SECONDS
        assert jwt.get_unverified_header(token)["alg"] == ALGORITHM

    def test_claims_round_trip(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        claims = verify_token(token, SECRET, now=NOW + 1)
        assert claims is not None
        assert claims["userId"] == 7
        assert claims["email"] == "admin@example.com"
        assert claims["role"] == "admin"


class TestVerifyToken:
    """Test cases for verify_token."""

    def test_valid_until_one_second_before_expiry(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        assert verify_token(token, SECRET, now=NOW + TOKEN_TTL_SECONDS - 1) is not None

    def test_expired_at_exp(self) -> None:
        """There is no leeway: a token is dead at exactly ``exp``."""
        token = issue_token(CLAIMS, SECRET, now=NOW)
        assert verify_token(token, SECRET, now=NOW + TOKEN_TTL_SECONDS) is None

    def test_wrong_secret(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        assert verify_token(token, "another-secret", now=NOW) is None

    def test_single_character_signature_change_rejected(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        head, last = token[:-1], token[-1]
        for replacement in "AQgwBRhx":
            if replacement == last:
                continue
            assert verify_token(head + replacement, SECRET, now=NOW) is None

    def test_tampered_payload_rejected(self) -> None:
        token = issue_token(CLAIMS, SECRET, now=NOW)
        forged = issue_token({**CLAIMS, "role": "admin", "userId": 99}, "attacker", now=NOW)
        header, _, signature = token.split(".")
        payload = forged.split(".")[1]
        assert verify_token(f"{header}.{payload}.{signature}", SECRET, now=NOW) is None

    def test_missing_exp_rejected(self) -> None:
        token = jwt.encode(CLAIMS, SECRET, algorithm=ALGORITHM)
        assert verify_token(token, SECRET, now=NOW) is None

    def test_malformed_tokens(self) -> None:
        for token in ("", "abc", "a.b", "a.b.c", "not.a.token.at.all"):
            assert verify_token(token, SECRET, now=NOW) is None
