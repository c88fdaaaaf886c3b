"""FastAPI dependencies shared by every router."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity.customer.customer import Role
from storefront.http import unwrap

bearer = HTTPBearer(auto_error=False)


def get_container(request: Request):
    return request.app.state.container


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    container=Depends(get_container),
) -> str:
    return unwrap(container.access.authorize(_token(credentials)))


def admin_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    container=Depends(get_container),
) -> str:
    return unwrap(container.access.authorize(_token(credentials), role=Role.ADMIN))
