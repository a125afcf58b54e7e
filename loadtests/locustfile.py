"""Storefront load testing, Locust entry point.

Usage:
    # All users (web UI):
    locust -f loadtests/locustfile.py

    # Catalogue browsing only:
    locust -f loadtests/locustfile.py BrowsingUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ShopperUser CheckoutBurstUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import BrowsingUser, CheckoutBurstUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log the API error message for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and response.status_code not in (401, 429):
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            health = requests.get(f"{environment.host}/health", timeout=5).json()
            print(f"[LOADTEST] Health: {health}")
        except requests.RequestException as e:
            print(f"[LOADTEST] Health check failed: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    sent = environment.stats.get("POST /carts/{sid}/checkout", "POST").num_requests
    print(f"[LOADTEST] Checkout requests sent: {sent}\n")
