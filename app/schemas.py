"""Request bodies for the JSON API.

The engine's dataclasses are used directly as field types; pydantic
validates them and hands back real dataclass instances.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from dinner_planner.models import PantryItem, Plan, Preferences, Recipe


class RecommendationRequest(BaseModel):
    recipes: list[Recipe]
    pantry: list[PantryItem] = Field(default_factory=list)
    min_score: int = 0
    today: Optional[date] = None


class GenerateRequest(BaseModel):
    recipes: list[Recipe]
    preferences: Preferences = Field(default_factory=Preferences)
    anchor_date: Optional[date] = None
    seed: Optional[int] = None


class RegenerateRequest(BaseModel):
    plan: Plan
    recipes: list[Recipe]
    preferences: Preferences = Field(default_factory=Preferences)
    start_index: int
    end_index: int
    seed: Optional[int] = None


class RegenerateWeekRequest(BaseModel):
    plan: Plan
    recipes: list[Recipe]
    preferences: Preferences = Field(default_factory=Preferences)
    week_index: int = 0
    seed: Optional[int] = None


class SwapRequest(BaseModel):
    plan: Plan
    first_index: int
    second_index: int


class RelinkRequest(BaseModel):
    plan: Plan
