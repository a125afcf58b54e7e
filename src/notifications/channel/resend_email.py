"""Resend email adapter: sends through the Resend HTTP API.

https://resend.com/docs/api-reference/emails/send-email
"""

import requests
import structlog

from notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ResendEmailAdapter(EmailPort):
    def __init__(
        self,
        api_key: str,
        from_email: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.timeout = timeout
        self._session = session or requests.Session()

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        payload = {"from": self.from_email, "to": [to], "subject": subject, "text": body}
        if html_body:
            payload["html"] = html_body

        try:
            response = self._session.post(
                RESEND_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Resend request failed", to=to, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        message_id = response.json().get("id")
        return {"message_id": message_id, "status": "sent"}
