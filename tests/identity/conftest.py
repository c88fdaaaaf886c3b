import pytest


@pytest.fixture(autouse=True)
def _ctx(identity):
    """Run every test inside the identity domain context."""
    with identity.domain_context():
        yield
