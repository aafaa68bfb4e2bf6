"""Dataclass models shared by the recommendation and plan engines.

These are plain data containers with no business logic.  Dates are
datetime.date values; timestamps are timezone-aware datetimes.  Plans and
day slots are treated as values: the engine always builds new instances
instead of mutating the ones it was given.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

PANTRY_CATEGORIES = ["produce", "meat", "dairy", "pantry", "frozen", "other"]

MEAL = "meal"
EATING_OUT = "eating_out"
LEFTOVERS = "leftovers"
SLOT_KINDS = [MEAL, EATING_OUT, LEFTOVERS]

DURATION_UNITS = ["week", "month"]


@dataclass
class IngredientEntry:
    """A structured ingredient line (e.g. name='rice', quantity='2 cups')."""
    name: str = ""
    quantity: str = ""
    optional: bool = False


# A recipe ingredient is either a bare string or a structured entry.
Ingredient = Union[str, IngredientEntry]


@dataclass
class Recipe:
    """A recipe in the library.

    prep_time is in minutes; 0 means unknown.  Duplicate detection is the
    caller's concern, the engine never creates or merges recipes.
    """

    id: str
    name: str
    description: str = ""
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: str = ""
    links: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    prep_time: int = 0
    image_url: Optional[str] = None
    notes: str = ""
    created_at: Optional[datetime] = None
    last_cooked_at: Optional[datetime] = None


@dataclass
class PantryItem:
    """An inventory item.  Quantity is free text; category is one of PANTRY_CATEGORIES."""

    id: str
    name: str
    quantity: str = ""
    unit: str = ""
    category: str = "other"
    expiration_date: Optional[date] = None
    added_at: Optional[datetime] = None
    notes: str = ""


@dataclass
class DaySlot:
    """One calendar day of a plan.

    recipe_id is None for eating_out days.  For leftovers, leftover_from_date
    is the date of the cooked meal being reused and recipe_id matches it.
    Locked days are skipped by regeneration.
    """

    date: date
    kind: str = MEAL
    recipe_id: Optional[str] = None
    leftover_from_date: Optional[date] = None
    note: str = ""
    locked: bool = False


@dataclass
class Plan:
    """A contiguous calendar of DaySlots starting at start_date."""

    id: str
    start_date: date
    days: list[DaySlot] = field(default_factory=list)
    duration: str = "week"
    duration_count: int = 1
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


@dataclass
class MatchResult:
    """How well a recipe can be made from the current pantry (0-100)."""

    recipe: Recipe
    match_score: int
    available_ingredients: list[str] = field(default_factory=list)
    missing_ingredients: list[str] = field(default_factory=list)
    has_expiring_ingredients: bool = False


@dataclass
class Preferences:
    """Plan generation inputs.

    eating_out_days and leftover_days are totals for the whole plan.
    use_pantry_ingredients is carried for callers but ignored by the generator.
    """

    duration: str = "week"
    duration_count: int = 1
    eating_out_days: int = 0
    leftover_days: int = 0
    excluded_recipe_ids: list[str] = field(default_factory=list)
    prefer_quick_recipes: bool = False
    use_pantry_ingredients: bool = False
