"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Cup",
                    "amount": 10.90,
                    "description": "Stoneware cup, 90 ml.",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    amount: float = Field(..., ge=0)
    description: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    amount: float
    description: str | None = None
