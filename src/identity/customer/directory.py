"""User directory port and its Protean adapter.

Checkout and payment reconciliation read customers through this narrow
read-only interface. Login reads the stored password hash through it too.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from identity.customer.customer import Customer


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str


@dataclass(frozen=True)
class Credentials:
    user_id: str
    password_hash: str | None


class UserDirectory(ABC):
    @abstractmethod
    def load_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    def load_credentials(self, email: str) -> Credentials | None: ...


class ProteanUserDirectory(UserDirectory):
    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    def load_by_id(self, user_id: str) -> User | None:
        with self._domain.domain_context():
            try:
                customer = self._domain.repository_for(Customer).get(user_id)
            except ObjectNotFoundError:
                return None
            return User(
                id=str(customer.id),
                name=customer.name,
                email=customer.email,
                role=customer.role,
            )

    def load_credentials(self, email: str) -> Credentials | None:
        with self._domain.domain_context():
            customer = self._domain.repository_for(Customer).find_by_email(email)
            if customer is None:
                return None
            return Credentials(user_id=str(customer.id), password_hash=customer.password_hash)
