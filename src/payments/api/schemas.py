"""Pydantic request/response schemas for the Payments API.

The webhook body itself is not modelled here: it is verified against its
raw bytes and parsed by the webhook parser.
"""

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
