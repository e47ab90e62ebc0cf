"""Price history data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PricePoint(BaseModel):
    """A single observed price."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    price: float


def closes(points: list[PricePoint]) -> list[float]:
    """Extract the price column from an ascending price series."""
    return [p.price for p in points]
