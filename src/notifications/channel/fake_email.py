"""Fake email adapter: records messages in memory for tests and local runs."""

from uuid import uuid4

from notifications.channel.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.attempts: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send = False
        self.failing_recipients: set[str] = set()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_on_send: bool = False,
        failing_recipients: set[str] | None = None,
    ):
        """Make sends fail, for everyone or only for ``failing_recipients``.

        With ``raise_on_send`` a failing send raises ``ConnectionError``
        instead of returning a "failed" status.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send
        self.failing_recipients = set(failing_recipients or ())

    def _fails_for(self, to: str) -> bool:
        if self.failing_recipients:
            return to in self.failing_recipients
        return not self.should_succeed

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        self.attempts.append(to)

        if self._fails_for(to):
            if self.raise_on_send:
                raise ConnectionError(self.failure_reason)
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.sent_emails.clear()
        self.attempts.clear()
        self.configure()
