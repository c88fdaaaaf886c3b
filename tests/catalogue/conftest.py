import pytest


@pytest.fixture(autouse=True)
def _ctx(catalogue):
    """Run every test inside the catalogue domain context."""
    with catalogue.domain_context():
        yield
