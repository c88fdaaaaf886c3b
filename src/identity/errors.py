"""Expected failures of identity lookups and access control."""

from shared.errors import DomainError


class UserNotFoundError(DomainError):
    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}" if user_id else "User not found")


class InvalidTokenError(DomainError):
    default_message = "Invalid or missing access token"


class AccessDeniedError(DomainError):
    default_message = "Access denied"


class InvalidCredentialsError(DomainError):
    default_message = "Invalid email or password"
