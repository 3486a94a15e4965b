"""User profile captured from the intake form."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose", "maintain", "gain"]

DIETARY_OPTIONS: tuple[str, ...] = (
    "Vegan",
    "Vejetaryen",
    "Glutensiz",
    "Laktozsuz",
    "Ketojenik",
    "Düşük Karbonhidrat",
    "Akdeniz Diyeti",
)


class UserProfile(BaseModel):
    """Body stats, goals and preferences for a single planning session."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    age: int = Field(ge=1, le=120)
    gender: Gender = "male"
    weight: float = Field(ge=20, le=300)
    height: float = Field(ge=100, le=250)
    activity_level: ActivityLevel = "moderate"
    goal: Goal = "maintain"
    restrictions: tuple[str, ...] = ()
    allergies: str = ""
    disliked_foods: str = ""
    medical_conditions: str = ""
    extra_notes: str = ""
