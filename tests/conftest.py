import os
import tempfile
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pin the environment before any storefront module is imported.

    The ordering domain configures logging at import time, so the log
    directory and environment name have to be in place first.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "storefront-test-logs"))
    # Tests never talk to the real email or identity provider.
    os.environ.pop("RESEND_API_KEY", None)
    os.environ.pop("FIREBASE_API_KEY", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def _reset_adapters():
    """Drop any channel/provider a test installed."""
    yield

    from notifications.channel import reset_email_channel
    from ordering.auth import reset_identity_provider
    from ordering.config import get_settings

    reset_email_channel()
    reset_identity_provider()
    get_settings.cache_clear()
