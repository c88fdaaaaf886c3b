"""Email and password login."""

from dataclasses import dataclass

import structlog

from identity.access.passwords import PasswordHasher
from identity.access.tokens import AccessTokens
from identity.customer.directory import UserDirectory
from identity.errors import InvalidCredentialsError
from shared.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AccessGrant:
    user_id: str
    access_token: str


class Authenticate:
    """Exchanges an email and password for a fresh access token.

    An unknown email and a wrong password fail the same way, so the response
    does not reveal which accounts exist.
    """

    def __init__(self, users: UserDirectory, passwords: PasswordHasher, tokens: AccessTokens) -> None:
        self._users = users
        self._passwords = passwords
        self._tokens = tokens

    def authenticate(self, email: str, password: str) -> Result[AccessGrant, InvalidCredentialsError]:
        credentials = self._users.load_credentials(email)
        if credentials is None:
            logger.info("Login refused", reason="unknown_email")
            return Err(InvalidCredentialsError())

        if not self._passwords.verify(password, credentials.password_hash):
            logger.info("Login refused", reason="wrong_password", user_id=credentials.user_id)
            return Err(InvalidCredentialsError())

        logger.info("Customer logged in", user_id=credentials.user_id)
        return Ok(AccessGrant(user_id=credentials.user_id, access_token=self._tokens.issue(credentials.user_id)))
