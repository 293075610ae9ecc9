"""Tests for demo login and JWT handling."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError, jwt

from bizbooks.core.config import settings
from bizbooks.domain.services.demo_auth import (
    create_access_token,
    decode_access_token,
    verify_demo_password,
)


class TestVerifyDemoPassword:

    def test_correct_password(self, monkeypatch):
        monkeypatch.setattr(settings, "DEMO_PASSWORD", "demo123")
        assert verify_demo_password("demo123")

    def test_wrong_password(self, monkeypatch):
        monkeypatch.setattr(settings, "DEMO_PASSWORD", "demo123")
        assert not verify_demo_password("demo124")
        assert not verify_demo_password("")


class TestTokens:

    def test_round_trip(self):
        token, expires_in = create_access_token("42")
        assert decode_access_token(token) == "42"
        assert expires_in == settings.JWT_ACCESS_EXPIRE_MINUTES * 60

    def test_foreign_signature_rejected(self):
        payload = {
            "sub": "42",
            "type": "user_access",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        }
        token = jwt.encode(payload, "someone-elses-secret", algorithm=settings.JWT_ALGORITHM)
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(JWTError):
            decode_access_token("not-a-token")

    def test_expired_token_rejected(self):
        payload = {
            "sub": "42",
            "type": "user_access",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        }
        token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_wrong_token_type_rejected(self):
        payload = {
            "sub": "42",
            "type": "refresh",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        }
        token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        with pytest.raises(JWTError):
            decode_access_token(token)
