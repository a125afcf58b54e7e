"""Identity provider port.

Token verification is delegated to the external authentication provider.
The storefront only needs to turn a bearer token into a ``Requester``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Requester:
    """The signed-in user making a request."""

    uid: str
    email: str | None = None
    display_name: str | None = None


class IdentityProvider(ABC):
    @abstractmethod
    def verify_token(self, token: str) -> Requester | None:
        """Return the token's owner, or ``None`` when the token is invalid or expired."""
        ...
