"""FastAPI endpoints for the Identity domain.

Both endpoints hash or check a password with bcrypt, so they are plain
``def`` routes and run in the threadpool.
"""

from fastapi import APIRouter, Depends

from identity.api.schemas import (
    AccessTokenResponse,
    LoginRequest,
    RegisterCustomerRequest,
    RegisteredCustomerResponse,
)
from identity.customer.registration import RegisterCustomer
from storefront.dependencies import get_container
from storefront.http import unwrap

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", status_code=201, response_model=RegisteredCustomerResponse)
def register_customer(body: RegisterCustomerRequest, container=Depends(get_container)) -> RegisteredCustomerResponse:
    """Register a shopper account and hand back a bearer token for it.

    Administrators are created from the command line, never over HTTP.
    """
    command = RegisterCustomer(
        name=body.name,
        email=body.email,
        password_hash=container.passwords.hash(body.password),
    )
    with container.identity.domain_context():
        customer_id = container.identity.process(command, asynchronous=False)
    return RegisteredCustomerResponse(
        customer_id=customer_id,
        access_token=container.tokens.issue(customer_id),
    )


@router.post("/login", response_model=AccessTokenResponse)
def login(body: LoginRequest, container=Depends(get_container)) -> AccessTokenResponse:
    grant = unwrap(container.authenticate.authenticate(body.email, body.password))
    return AccessTokenResponse(customer_id=grant.user_id, access_token=grant.access_token)
