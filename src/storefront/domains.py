"""The three Protean domains behind the storefront, initialized once per process."""

from catalogue.domain import catalogue
from identity.domain import identity
from ordering.domain import ordering

DOMAINS = {
    "identity": identity,
    "catalogue": catalogue,
    "ordering": ordering,
}

_initialized: set[str] = set()


def init_domains(names=None) -> dict:
    """Initialize the named domains (all by default) and return them by name.

    ``Domain.init()`` walks the package and registers every element, so it
    must only run once per domain.
    """
    targets = {name: DOMAINS[name] for name in names} if names else dict(DOMAINS)
    for name, domain in targets.items():
        if name not in _initialized:
            domain.init()
            _initialized.add(name)
    return targets
