import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def identity():
    from ordering.auth import set_identity_provider
    from ordering.auth.fake_adapter import FakeIdentityProvider

    provider = FakeIdentityProvider()
    set_identity_provider(provider)
    return provider


@pytest.fixture()
def auth_headers(identity):
    token = identity.issue("user-001", email="asha@example.com", display_name="Asha Patil")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client(settings, email):
    from ordering.api.application import create_app
    from ordering.checkout.rate_limit import RateLimiter

    app = create_app(settings=settings, rate_limiter=RateLimiter.from_settings(settings))
    return TestClient(app)
