"""Runtime settings, read from the environment.

``PROTEAN_ENV`` picks the Protean config overlay (``production`` switches the
domains to PostgreSQL). Everything else is prefixed ``STOREFRONT_``.
"""

import os
from dataclasses import dataclass


def _env(name: str, default: str) -> str:
    return os.getenv(f"STOREFRONT_{name}", default)


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    webhook_secret: str = "whsec_development"
    webhook_tolerance: int = 300
    jwt_secret: str = "development-jwt-secret"
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 12
    password_hash_rounds: int = 12
    default_order_status: str = "pending"
    default_payment_status: str = "pending"
    currency: str = "usd"
    gateway: str = "fake"
    stripe_api_key: str | None = None
    checkout_success_url: str = "http://localhost:8000/checkout/success"
    checkout_cancel_url: str = "http://localhost:8000/checkout/cancel"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            environment=os.getenv("PROTEAN_ENV", defaults.environment),
            webhook_secret=_env("WEBHOOK_SECRET", defaults.webhook_secret),
            webhook_tolerance=int(_env("WEBHOOK_TOLERANCE", str(defaults.webhook_tolerance))),
            jwt_secret=_env("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=_env("JWT_ALGORITHM", defaults.jwt_algorithm),
            token_ttl_hours=int(_env("TOKEN_TTL_HOURS", str(defaults.token_ttl_hours))),
            password_hash_rounds=int(_env("PASSWORD_HASH_ROUNDS", str(defaults.password_hash_rounds))),
            default_order_status=_env("DEFAULT_ORDER_STATUS", defaults.default_order_status),
            default_payment_status=_env("DEFAULT_PAYMENT_STATUS", defaults.default_payment_status),
            currency=_env("CURRENCY", defaults.currency),
            gateway=_env("GATEWAY", defaults.gateway),
            stripe_api_key=os.getenv("STOREFRONT_STRIPE_API_KEY"),
            checkout_success_url=_env("CHECKOUT_SUCCESS_URL", defaults.checkout_success_url),
            checkout_cancel_url=_env("CHECKOUT_CANCEL_URL", defaults.checkout_cancel_url),
        )
