import pytest


@pytest.fixture(autouse=True)
def _ctx(ordering):
    """Run every test inside the ordering domain context."""
    with ordering.domain_context():
        yield
