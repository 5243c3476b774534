"""
Domain Models

Order and popularity records as they are persisted and returned by the API.
Field aliases match the on-disk JSON layout:

    order-<orderId>.json  ->  {"orderId", "drink", "customerName",
                               "instructions", "timestamp"}

Timestamps are always UTC and serialised as RFC3339 with a ``Z`` suffix.
"""

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    field_serializer,
    field_validator,
)

# RFC3339 allows nanosecond precision; datetime keeps microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Order(BaseModel):
    """A single drink order. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_id: str = Field(..., alias="orderId", min_length=1)
    drink: str = Field(..., min_length=1)
    customer_name: str = Field(..., alias="customerName", min_length=1)
    instructions: str = ""
    timestamp: datetime

    @field_validator("timestamp", mode="before")
    @classmethod
    def truncate_fraction(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _FRACTION_RE.sub(r"\1", v)
        return v

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("timestamp")
    def serialize_timestamp(self, v: datetime) -> str:
        return v.isoformat().replace("+00:00", "Z")

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True)


class PopularityItem(BaseModel):
    """One row of the popularity snapshot."""

    model_config = ConfigDict(frozen=True)

    drink: str
    count: int = Field(..., ge=0)


class PopularStats(BaseModel):
    """Whole popularity record as stored in popular.json."""

    counts: dict[str, NonNegativeInt] = Field(default_factory=dict)
