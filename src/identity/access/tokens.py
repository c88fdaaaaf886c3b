"""Bearer access tokens: port and PyJWT adapter."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

import jwt
import structlog

logger = structlog.get_logger(__name__)


class AccessTokens(ABC):
    @abstractmethod
    def issue(self, user_id: str) -> str:
        """Return a signed token identifying ``user_id``."""
        ...

    @abstractmethod
    def decode(self, token: str) -> str | None:
        """Return the user id carried by ``token``, or ``None`` if it is invalid or expired."""
        ...


class JwtAccessTokens(AccessTokens):
    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=12)) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str) -> str:
        now = datetime.now(UTC)
        claims = {"sub": str(user_id), "iat": now, "exp": now + self.ttl}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> str | None:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            logger.info("Rejected access token", reason=str(exc))
            return None
        return claims.get("sub")
