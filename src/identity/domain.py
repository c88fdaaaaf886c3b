"""Identity bounded context: customers, roles and access tokens."""

from protean.domain import Domain

identity = Domain(name="identity")
