"""Role-aware access control for storefront endpoints."""

import structlog

from identity.access.tokens import AccessTokens
from identity.customer.customer import Role
from identity.customer.directory import UserDirectory
from identity.errors import AccessDeniedError, InvalidTokenError
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class AccessControl:
    """Resolves a bearer token to a user id, enforcing the required role.

    ``Role.CUSTOMER`` admits every registered account; ``Role.ADMIN`` admits
    administrators only.
    """

    def __init__(self, tokens: AccessTokens, users: UserDirectory) -> None:
        self._tokens = tokens
        self._users = users

    def authorize(
        self, token: str | None, role: Role = Role.CUSTOMER
    ) -> Result[str, InvalidTokenError | AccessDeniedError]:
        if not token:
            return Err(InvalidTokenError())

        user_id = self._tokens.decode(token)
        if not user_id:
            return Err(InvalidTokenError())

        user = self._users.load_by_id(user_id)
        if user is None:
            logger.warning("Token refers to unknown user", user_id=user_id)
            return Err(AccessDeniedError())

        if role == Role.ADMIN and user.role != Role.ADMIN.value:
            logger.warning("Admin access refused", user_id=user_id, role=user.role)
            return Err(AccessDeniedError())

        return Ok(user.id)
