"""In-memory identity provider for development and testing.

Tokens are registered up front with ``issue`` (or ``register`` for a chosen
token string); anything else fails verification.
"""

from uuid import uuid4

from ordering.auth.port import IdentityProvider, Requester


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self._tokens: dict[str, Requester] = {}
        self.verified: list[str] = []

    def register(self, token: str, requester: Requester) -> None:
        self._tokens[token] = requester

    def issue(self, uid: str, email: str | None = None, display_name: str | None = None) -> str:
        token = f"fake-token-{uuid4().hex[:16]}"
        self.register(token, Requester(uid=uid, email=email, display_name=display_name))
        return token

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def verify_token(self, token: str) -> Requester | None:
        self.verified.append(token)
        return self._tokens.get(token)

    def reset(self) -> None:
        self._tokens.clear()
        self.verified.clear()
