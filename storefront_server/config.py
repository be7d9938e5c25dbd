"""Runtime configuration read from the environment."""

import os
from decimal import Decimal
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .pricing import DEFAULT_TAX_RATE

ENV_PREFIX = "STOREFRONT_"


class StorefrontConfig(BaseModel):
    """Storefront settings."""

    catalog_url: Optional[str] = Field(
        None, description="Catalog backend base URL; the built-in fixture catalog is used when unset"
    )
    discount_percent: Decimal = Field(default=Decimal("10"), ge=0, le=100, description="Cart discount percentage")
    tax_rate: Decimal = Field(default=DEFAULT_TAX_RATE, description="Tax rate as a fraction")
    fixture_latency: float = Field(default=0.1, ge=0, description="Simulated fixture catalog delay in seconds")
    request_timeout: float = Field(default=30.0, gt=0, description="Catalog request timeout in seconds")
    log_level: str = Field(default="INFO", description="Logging level name")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StorefrontConfig":
        """
        Build the configuration from STOREFRONT_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        values = {}
        for field_name in cls.model_fields:
            value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if value:
                values[field_name] = value
        return cls(**values)
