"""Expected failures of payment event reconciliation."""

from shared.errors import DomainError


class GatewayIncompatibilityError(DomainError):
    default_message = "Gateway event could not be verified"


class EventNotProcessError(DomainError):
    default_message = "Gateway event cannot be processed"
