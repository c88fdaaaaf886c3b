"""Customer aggregate: a registered shopper or store administrator."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.domain import identity


class Role(Enum):
    """Access level of a customer account. Admins may manage the catalogue and orders."""

    CUSTOMER = "customer"
    ADMIN = "admin"


@identity.aggregate
class Customer:
    """A person who can fill a cart and pay for orders.

    The email address is unique across the platform and is what the payment
    gateway receives at checkout.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    password_hash: String(max_length=255)
    registered_at: DateTime()

    @invariant.post
    def email_must_have_one_at_sign(self):
        if self.email is None:
            return
        local_part, _, domain_part = self.email.partition("@")
        if not local_part or "." not in domain_part or "@" in domain_part or " " in self.email:
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, name, email, role=Role.CUSTOMER.value, password_hash=None):
        from identity.customer.events import CustomerRegistered

        now = datetime.now(UTC)
        customer = cls(
            name=name,
            email=email.strip().lower(),
            role=role,
            password_hash=password_hash,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=customer.email,
                name=customer.name,
                role=customer.role,
                registered_at=now,
            )
        )
        return customer

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@identity.repository(part_of=Customer)
class CustomerRepository:
    def find_by_email(self, email: str) -> Customer | None:
        results = self._dao.query.filter(email=email.strip().lower()).all().items
        return results[0] if results else None
