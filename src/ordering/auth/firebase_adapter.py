"""Firebase Authentication adapter.

Verifies the ID token the browser obtained from Firebase Auth by looking it
up through the Identity Toolkit REST API. An invalid, expired or revoked
token comes back as an error response and verifies to ``None``.

https://cloud.google.com/identity-platform/docs/reference/rest/v1/accounts/lookup
"""

import requests
import structlog

from ordering.auth.port import IdentityProvider, Requester

logger = structlog.get_logger(__name__)

FIREBASE_LOOKUP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:lookup"
DEFAULT_TIMEOUT_SECONDS = 5.0


class FirebaseIdentityProvider(IdentityProvider):
    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def verify_token(self, token: str) -> Requester | None:
        try:
            response = self._session.post(
                FIREBASE_LOOKUP_URL,
                params={"key": self.api_key},
                json={"idToken": token},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Firebase token lookup failed", error=str(exc))
            return None

        try:
            response.raise_for_status()
            users = response.json().get("users") or []
        except requests.RequestException as exc:
            logger.info("Firebase token rejected", status=response.status_code, error=str(exc))
            return None

        if not users or not users[0].get("localId"):
            return None

        user = users[0]
        return Requester(uid=user["localId"], email=user.get("email"), display_name=user.get("displayName"))
