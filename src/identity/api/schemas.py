"""Pydantic request/response schemas for the Identity API."""

from pydantic import BaseModel, Field, field_validator

from identity.access.passwords import MAX_PASSWORD_BYTES


class RegisterCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "password": "analytical-engine",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_fits_the_hash(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class RegisteredCustomerResponse(BaseModel):
    customer_id: str
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str


class AccessTokenResponse(BaseModel):
    customer_id: str
    access_token: str
    token_type: str = "bearer"
