"""Email channel port: the transactional email provider as seen by the fan-out."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Send one message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)

        Adapters may also raise; callers treat an exception like a "failed" status.
        """
        ...
