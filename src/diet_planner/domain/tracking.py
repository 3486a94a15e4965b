"""Weight journal models."""

import datetime

from pydantic import BaseModel, ConfigDict, Field


class WeightEntry(BaseModel):
    """A single weigh-in; at most one is kept per calendar date."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    weight: float = Field(gt=0)
