"""Customer registration: command and handler.

The command carries the password already hashed; plaintext never enters the
domain or its event store.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer, Role
from identity.domain import identity


@identity.command(part_of="Customer")
class RegisterCustomer:
    """Create a new customer account."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(max_length=20, default=Role.CUSTOMER.value)


@identity.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A customer with this email is already registered"]})

        customer = Customer.register(
            name=command.name,
            email=command.email,
            role=command.role or Role.CUSTOMER.value,
            password_hash=command.password_hash,
        )
        repo.add(customer)
        return str(customer.id)
