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

    Select the Protean config overlay before any domain is initialized.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


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
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def domains():
    """Initialize identity, catalogue and ordering once per session."""
    from storefront.domains import init_domains

    return init_domains()


@pytest.fixture(scope="session", autouse=True)
def setup_db(domains):
    from storefront.db import drop_db, setup_db

    for domain in domains.values():
        setup_db(domain)

    yield

    for domain in domains.values():
        drop_db(domain)


@pytest.fixture(autouse=True)
def run_around_tests(domains):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    for domain in domains.values():
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()

            domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared collaborators
# ---------------------------------------------------------------------------
@pytest.fixture
def catalogue(domains):
    return domains["catalogue"]


@pytest.fixture
def identity(domains):
    return domains["identity"]


@pytest.fixture
def ordering(domains):
    return domains["ordering"]


@pytest.fixture
def catalog(catalogue):
    from catalogue.product.catalog import ProteanCatalog

    return ProteanCatalog(catalogue)


@pytest.fixture
def users(identity):
    from identity.customer.directory import ProteanUserDirectory

    return ProteanUserDirectory(identity)


@pytest.fixture
def carts(ordering):
    from ordering.cart.store import ProteanCartStore

    return ProteanCartStore(ordering)


@pytest.fixture
def intents(ordering):
    from ordering.checkout.store import ProteanPurchaseIntentStore

    return ProteanPurchaseIntentStore(ordering)


@pytest.fixture
def orders(ordering):
    from ordering.order.store import ProteanOrderStore

    return ProteanOrderStore(ordering)


@pytest.fixture
def ids():
    from shared.ids import UuidIdGenerator

    return UuidIdGenerator()


@pytest.fixture
def add_product(catalogue):
    """Factory: store a product in the catalogue and return its id."""
    from catalogue.product.creation import AddProduct

    def _add(name="Espresso Cup", amount=10.90, description=None):
        with catalogue.domain_context():
            return catalogue.process(
                AddProduct(name=name, amount=amount, description=description),
                asynchronous=False,
            )

    return _add


@pytest.fixture
def passwords():
    from identity.access.passwords import BcryptPasswordHasher

    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def register_customer(identity, passwords):
    """Factory: register a customer (or admin) and return its id."""
    from identity.customer.registration import RegisterCustomer

    counter = {"n": 0}

    def _register(name="Ada Lovelace", email=None, role="customer", password="correct-horse-battery"):
        counter["n"] += 1
        email = email or f"shopper{counter['n']}@example.com"
        with identity.domain_context():
            return identity.process(
                RegisterCustomer(name=name, email=email, role=role, password_hash=passwords.hash(password)),
                asynchronous=False,
            )

    return _register


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture
def settings():
    from storefront.config import Settings

    return Settings(
        environment="test",
        webhook_secret="whsec_test",
        jwt_secret="test-secret",
        password_hash_rounds=4,
    )


@pytest.fixture
def container(settings):
    from payments.gateway.fake_adapter import FakeGateway
    from storefront.container import build_container

    return build_container(settings, gateway=FakeGateway())


@pytest.fixture
def client(container):
    from fastapi.testclient import TestClient
    from storefront.app import create_app

    return TestClient(create_app(container=container))


@pytest.fixture
def auth_headers(container):
    """Factory: bearer headers for the given user id."""

    def _headers(user_id):
        return {"Authorization": f"Bearer {container.tokens.issue(user_id)}"}

    return _headers
