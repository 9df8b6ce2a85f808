# src/fxconvert/adapters/http/schemas.py
"""
HTTP Schemas - Response Bodies of the JSON API

Decimal values are kept exact inside the service and rendered as JSON
numbers only when the response is serialized.

Files that USE this module:
- fxconvert.adapters.http.api (response models of every route)

Files that this module USES:
- fxconvert.domain.models (RateSet)
- fxconvert.application.rates_service (Conversion)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from fxconvert.application.rates_service import Conversion
from fxconvert.domain.models import RateSet

JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class LatestRatesResponse(BaseModel):
    date: str
    base: str
    rates: Dict[str, JsonDecimal]

    @classmethod
    def from_rate_set(cls, rate_set: RateSet) -> LatestRatesResponse:
        return cls(
            date=rate_set.date,
            base=rate_set.base,
            rates=dict(sorted(rate_set.rates.items())),
        )


class ConvertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    amount: JsonDecimal
    result: JsonDecimal
    rate: JsonDecimal
    date: str

    @classmethod
    def from_conversion(cls, conversion: Conversion) -> ConvertResponse:
        return cls(
            from_currency=conversion.from_currency,
            to_currency=conversion.to_currency,
            amount=conversion.amount,
            result=conversion.result,
            rate=conversion.rate,
            date=conversion.date,
        )


class HealthResponse(BaseModel):
    status: str
    redis: str
    last_update: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
