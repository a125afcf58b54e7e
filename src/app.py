"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the Protean config overlay.
from ordering.api.application import create_app
from ordering.auth import get_identity_provider
from ordering.domain import ordering

ordering.init()

# Raises in production or staging when no identity provider is configured.
get_identity_provider()

app = create_app()
