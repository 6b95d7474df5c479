"""Token issuer tests.

Learn: Tokens are checked two ways — signature (any tampering → invalid)
and time (past exp → expired). Expiry is simulated by issuing with an
issued_at far enough in the past; no sleeping.
"""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from warden.auth.jwt import TokenIssuer
from warden.errors import (
    AuthenticationError,
    InvalidTokenError,
    SigningConfigError,
    TokenExpiredError,
)

SECRET = "unit-test-secret-with-enough-bytes-for-hs256"


@pytest.fixture
def issuer():
    return TokenIssuer(SECRET, lifetime=timedelta(minutes=30))


def _tamper(token: str, index: int) -> str:
    ch = token[index]
    replacement = "A" if ch != "A" else "B"
    return token[:index] + replacement + token[index + 1:]


# ═══════════════════════════════════════════════════════════
# Issue + verify
# ═══════════════════════════════════════════════════════════


def test_issue_then_verify(issuer):
    issued = issuer.issue(42, "a@test.com")
    claims = issuer.verify(issued.access_token)
    assert claims.subject == 42
    assert claims.email == "a@test.com"
    assert claims.expires_at - claims.issued_at == timedelta(minutes=30)


def test_issue_reports_lifetime(issuer):
    issued = issuer.issue(1, "a@test.com")
    assert issued.expires_in == 1800
    assert issued.token_type == "bearer"


def test_claims_use_standard_names(issuer):
    token = issuer.issue(7, "a@test.com").access_token
    payload = pyjwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["sub"] == "7"
    assert payload["email"] == "a@test.com"
    assert payload["exp"] - payload["iat"] == 1800


# ═══════════════════════════════════════════════════════════
# Expiry
# ═══════════════════════════════════════════════════════════


def test_token_expires_after_lifetime(issuer):
    past = datetime.now(timezone.utc) - timedelta(minutes=31)
    token = issuer.issue(1, "a@test.com", issued_at=past).access_token
    with pytest.raises(TokenExpiredError):
        issuer.verify(token)


def test_token_valid_just_before_expiry(issuer):
    past = datetime.now(timezone.utc) - timedelta(minutes=29)
    token = issuer.issue(1, "a@test.com", issued_at=past).access_token
    assert issuer.verify(token).subject == 1


# ═══════════════════════════════════════════════════════════
# Tampering
# ═══════════════════════════════════════════════════════════


def test_tampered_signature_is_invalid(issuer):
    token = issuer.issue(1, "a@test.com").access_token
    signature_start = token.rindex(".") + 1
    # The last base64url char can carry only padding bits; stay before it.
    for index in range(signature_start, len(token) - 1, 5):
        with pytest.raises(InvalidTokenError):
            issuer.verify(_tamper(token, index))


def test_tampered_payload_is_invalid(issuer):
    token = issuer.issue(1, "a@test.com").access_token
    header_end, payload_end = token.index("."), token.rindex(".")
    for index in range(header_end + 1, payload_end - 1, 3):
        with pytest.raises(InvalidTokenError):
            issuer.verify(_tamper(token, index))


def test_other_secret_is_invalid(issuer):
    other = TokenIssuer("a-completely-different-secret-of-some-length")
    token = other.issue(1, "a@test.com").access_token
    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


@pytest.mark.parametrize("garbage", ["", "garbage", "a.b.c", "Bearer x"])
def test_garbage_is_invalid(issuer, garbage):
    with pytest.raises(InvalidTokenError):
        issuer.verify(garbage)


def test_missing_claims_is_invalid(issuer):
    token = pyjwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


def test_non_numeric_subject_is_invalid(issuer):
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {"sub": "abc", "email": "a@test.com", "iat": now, "exp": now + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


def test_expired_and_invalid_are_both_authentication_errors(issuer):
    assert issubclass(TokenExpiredError, AuthenticationError)
    assert issubclass(InvalidTokenError, AuthenticationError)
    assert TokenExpiredError().status_code == InvalidTokenError().status_code == 401


# ═══════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════


def test_empty_secret_is_rejected():
    with pytest.raises(SigningConfigError):
        TokenIssuer("")


def test_non_positive_lifetime_is_rejected():
    with pytest.raises(SigningConfigError):
        TokenIssuer(SECRET, lifetime=timedelta(0))


def test_unknown_algorithm_fails_to_sign():
    with pytest.raises(SigningConfigError):
        TokenIssuer(SECRET, algorithm="NOPE").issue(1, "a@test.com")
