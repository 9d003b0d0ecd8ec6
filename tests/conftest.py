import os
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
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("NOTIFIER", "fake")

    from orderflow.domain import orderflow

    orderflow.init()
    orderflow.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from orderflow.domain import orderflow
    from orderflow.utils.db import drop_db, setup_db

    setup_db(orderflow)

    yield

    drop_db(orderflow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from orderflow.cache import get_cache, reset_cache
    from orderflow.cache.memory import MemoryCache
    from orderflow.catalogue.catalog_cache import CatalogCache
    from orderflow.notifications import reset_notifier
    from orderflow.utils.settings import reset_settings

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    cache = get_cache()
    if isinstance(cache, MemoryCache):
        cache.reset()
    else:
        CatalogCache(backend=cache).invalidate_all()

    reset_cache()
    reset_notifier()
    reset_settings()


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def memory_cache():
    from orderflow.cache import set_cache
    from orderflow.cache.memory import MemoryCache

    cache = MemoryCache()
    set_cache(cache)
    return cache


@pytest.fixture()
def notifier():
    from orderflow.notifications import set_notifier
    from orderflow.notifications.fake import FakeNotifier

    fake = FakeNotifier()
    set_notifier(fake)
    return fake


@pytest.fixture()
def customer():
    from orderflow.identity.user import User

    return User(id="user-001", email="alice@example.com", username="alice")


@pytest.fixture()
def other_customer():
    from orderflow.identity.user import User

    return User(id="user-002", email="bob@example.com", username="bob")


@pytest.fixture()
def florist():
    from orderflow.identity.user import User

    return User(id="florist-001", email="flora@example.com", username="flora", roles=frozenset({"FLORIST"}))


@pytest.fixture()
def make_product():
    """Factory that adds a product to the catalogue and returns its id."""
    from orderflow.catalogue.service import CatalogueService

    def _make(**overrides):
        defaults = {
            "name": "Red Rose Bouquet",
            "price": "25.00",
            "stock_quantity": 10,
            "category_id": "cat-bouquets",
            "is_active": True,
        }
        defaults.update(overrides)
        return CatalogueService().add_product(**defaults)

    return _make


@pytest.fixture()
def place_order():
    """Fill the user's cart with ``(product_id, quantity)`` pairs and place an order."""
    from orderflow.cart.service import CartService
    from orderflow.order.service import OrderService

    def _place(user, *lines, payment_method="COD", **kwargs):
        carts = CartService()
        for product_id, quantity in lines:
            carts.add_item(user, product_id, quantity)
        return OrderService().create_order(user, payment_method=payment_method, **kwargs)

    return _place
