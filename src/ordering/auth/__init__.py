"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap
implementations:
- FirebaseIdentityProvider when FIREBASE_API_KEY is configured
- FakeIdentityProvider otherwise, outside production and staging
"""

from ordering.auth.port import IdentityProvider, Requester

__all__ = ["IdentityProvider", "Requester", "get_identity_provider", "reset_identity_provider", "set_identity_provider"]

_current_provider: IdentityProvider | None = None

_DEPLOYED_ENVS = {"production", "staging"}


def get_identity_provider() -> IdentityProvider:
    global _current_provider
    if _current_provider is None:
        from ordering.config import get_settings

        settings = get_settings()
        if settings.firebase_api_key:
            from ordering.auth.firebase_adapter import FirebaseIdentityProvider

            _current_provider = FirebaseIdentityProvider(settings.firebase_api_key)
        elif settings.environment in _DEPLOYED_ENVS:
            raise RuntimeError(f"FIREBASE_API_KEY must be set when running in {settings.environment}")
        else:
            from ordering.auth.fake_adapter import FakeIdentityProvider

            _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
