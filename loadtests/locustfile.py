"""Storefront Load Testing — Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Mixed workload only:
    locust -f loadtests/locustfile.py MixedWorkloadUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.catalogue import CatalogueUser  # noqa: F401
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.ordering import CONTENDED_STOCK, OrderingUser, _contended  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios — no per-task wiring needed.
    Extracts the API error body so you see "BadRequest: Your cart is empty"
    instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check the contended product never went below zero."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    product_id = _contended["product_id"]
    if product_id is None or environment.host is None:
        return
    try:
        resp = requests.get(f"{environment.host}/products/{product_id}", timeout=5)
        product = resp.json()
        print(
            f"[LOADTEST] Contended product: {product['inventory']} of {CONTENDED_STOCK} left, "
            f"active={product['isActive']}"
        )
        if product["inventory"] < 0:
            print("[LOADTEST] OVERSOLD: inventory went negative")
        print()
    except Exception as e:
        print(f"[LOADTEST] Could not read contended product: {e}\n")
