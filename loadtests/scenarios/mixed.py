"""Mixed workload scenario.

Combines catalogue and ordering journeys with weights that model a small
store's traffic. This is the recommended scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowsingJourney, StoreOwnerJourney
from loadtests.scenarios.ordering import CheckoutJourney, ContendedStockJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (60%): listing, featured, search and detail reads.
    Store owner (10%): product create, update and delete.
    Checkout (20%): list, buy, read back order history.
    Contention (10%): shoppers racing for the last units of one product.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowsingJourney: 12,
        StoreOwnerJourney: 2,
        CheckoutJourney: 4,
        ContendedStockJourney: 2,
    }
