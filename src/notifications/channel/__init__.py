"""Email channel factory.

Provides get_email_channel() / set_email_channel() to swap implementations:
- ResendEmailAdapter when RESEND_API_KEY is configured
- FakeEmailAdapter otherwise (development and tests)
"""

from notifications.channel.email_port import EmailPort

_current_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _current_channel
    if _current_channel is None:
        from ordering.config import get_settings

        settings = get_settings()
        if settings.resend_api_key:
            from notifications.channel.resend_email import ResendEmailAdapter

            _current_channel = ResendEmailAdapter(settings.resend_api_key, settings.from_email)
        else:
            from notifications.channel.fake_email import FakeEmailAdapter

            _current_channel = FakeEmailAdapter()
    return _current_channel


def set_email_channel(channel: EmailPort) -> None:
    """Override the active email channel (useful for tests)."""
    global _current_channel
    _current_channel = channel


def reset_email_channel() -> None:
    global _current_channel
    _current_channel = None
