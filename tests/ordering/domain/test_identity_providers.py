"""Tests for the identity provider adapters and factory."""

import json
from unittest.mock import MagicMock

import pytest
import requests
from ordering.auth import Requester, get_identity_provider, reset_identity_provider
from ordering.auth.fake_adapter import FakeIdentityProvider
from ordering.auth.firebase_adapter import FIREBASE_LOOKUP_URL, FirebaseIdentityProvider
from ordering.config import get_settings


def _response(status_code, body):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode()
    response.url = FIREBASE_LOOKUP_URL
    return response


def _firebase(session):
    return FirebaseIdentityProvider("fb-test-key", session=session)


class TestFakeIdentityProvider:
    def test_issued_token_verifies(self):
        provider = FakeIdentityProvider()
        token = provider.issue("user-001", email="asha@example.com")
        assert provider.verify_token(token) == Requester(uid="user-001", email="asha@example.com")

    def test_unknown_and_revoked_tokens(self):
        provider = FakeIdentityProvider()
        token = provider.issue("user-001")
        provider.revoke(token)
        assert provider.verify_token(token) is None
        assert provider.verify_token("made-up") is None


class TestFirebaseIdentityProvider:
    def test_valid_token(self):
        session = MagicMock()
        session.post.return_value = _response(
            200,
            {"users": [{"localId": "fb-uid-1", "email": "asha@example.com", "displayName": "Asha Patil"}]},
        )

        requester = _firebase(session).verify_token("id-token")

        assert requester == Requester(uid="fb-uid-1", email="asha@example.com", display_name="Asha Patil")
        session.post.assert_called_once_with(
            FIREBASE_LOOKUP_URL,
            params={"key": "fb-test-key"},
            json={"idToken": "id-token"},
            timeout=5.0,
        )

    def test_rejected_token(self):
        session = MagicMock()
        session.post.return_value = _response(400, {"error": {"message": "INVALID_ID_TOKEN"}})
        assert _firebase(session).verify_token("expired") is None

    def test_no_user_in_response(self):
        session = MagicMock()
        session.post.return_value = _response(200, {"users": []})
        assert _firebase(session).verify_token("id-token") is None

    def test_network_error(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("unreachable")
        assert _firebase(session).verify_token("id-token") is None


class TestIdentityProviderFactory:
    @pytest.fixture(autouse=True)
    def _fresh(self):
        get_settings.cache_clear()
        reset_identity_provider()

    def test_defaults_to_fake_outside_production(self):
        assert isinstance(get_identity_provider(), FakeIdentityProvider)

    def test_firebase_when_key_configured(self, monkeypatch):
        monkeypatch.setenv("FIREBASE_API_KEY", "fb-live-key")
        get_settings.cache_clear()

        provider = get_identity_provider()

        assert isinstance(provider, FirebaseIdentityProvider)
        assert provider.api_key == "fb-live-key"

    @pytest.mark.parametrize("environment", ["production", "staging"])
    def test_deployed_environment_requires_key(self, monkeypatch, environment):
        monkeypatch.setenv("PROTEAN_ENV", environment)
        get_settings.cache_clear()

        with pytest.raises(RuntimeError, match="FIREBASE_API_KEY"):
            get_identity_provider()
