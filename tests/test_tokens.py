"""Tests for signed session tokens."""

from datetime import timedelta

import jwt
import pytest

from resume_matcher_api.core import TokenCodec
from resume_matcher_api.models import SessionIdentity

from conftest import TEST_SECRET


def test_sign_verify_round_trip(token_codec):
    token = token_codec.sign("user-1", "session-1")
    assert token_codec.verify(token) == SessionIdentity(user_id="user-1", session_id="session-1")


def test_token_is_header_safe(token_codec):
    token = token_codec.sign("user-1", "session-1")
    assert all(c.isalnum() or c in "-_." for c in token)
    assert token.count(".") == 2


def test_token_embeds_seven_day_expiry(token_codec, clock):
    token = token_codec.sign("user-1", "session-1")
    payload = jwt.decode(token, options={"verify_signature": False})
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())
    assert payload["iat"] == int(clock().timestamp())


def test_different_secret_rejected(token_codec, clock):
    other = TokenCodec("another-secret-key-with-enough-length-xyz", clock=clock)
    assert other.verify(token_codec.sign("user-1", "session-1")) is None


def test_truncated_token_rejected(token_codec):
    token = token_codec.sign("user-1", "session-1")
    assert token_codec.verify(token[:-5]) is None
    assert token_codec.verify(token.split(".")[0]) is None


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
def test_garbage_rejected(token_codec, garbage):
    assert token_codec.verify(garbage) is None


def test_expired_token_rejected(token_codec, clock):
    token = token_codec.sign("user-1", "session-1")

    clock.advance(days=7, seconds=-1)
    assert token_codec.verify(token) is not None

    clock.advance(seconds=1)
    assert token_codec.verify(token) is None


def test_tampered_payload_rejected(token_codec):
    forged = jwt.encode(
        {"user_id": "attacker", "session_id": "session-1", "exp": 9999999999},
        "wrong-secret-key-that-is-long-enough-123",
        algorithm="HS256",
    )
    assert token_codec.verify(forged) is None


def test_missing_claims_rejected(token_codec):
    token = jwt.encode({"user_id": "user-1", "exp": 9999999999}, TEST_SECRET, algorithm="HS256")
    assert token_codec.verify(token) is None


def test_missing_expiry_rejected(token_codec):
    token = jwt.encode({"user_id": "user-1", "session_id": "s-1"}, TEST_SECRET, algorithm="HS256")
    assert token_codec.verify(token) is None


def test_unsigned_token_rejected(token_codec):
    token = jwt.encode(
        {"user_id": "user-1", "session_id": "s-1", "exp": 9999999999}, None, algorithm="none"
    )
    assert token_codec.verify(token) is None


def test_expired_token_accepted_when_expiry_ignored(token_codec, clock):
    token = token_codec.sign("user-1", "session-1")

    clock.advance(days=30)

    assert token_codec.verify(token) is None
    assert token_codec.verify(token, verify_expiry=False) == SessionIdentity(
        user_id="user-1", session_id="session-1"
    )


def test_bad_signature_rejected_even_when_expiry_ignored(token_codec, clock):
    other = TokenCodec("another-secret-key-with-enough-length-xyz", clock=clock)

    assert token_codec.verify(other.sign("user-1", "session-1"), verify_expiry=False) is None
