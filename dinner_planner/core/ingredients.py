"""Ingredient name normalization and pantry staples.

Staples are things every kitchen is assumed to have (salt, oil, ...).  They
are left out of recipe matching entirely, so a recipe made only of staples is
always a full match.
"""

import re

from dinner_planner.models import IngredientEntry, Recipe

PANTRY_STAPLES = [
    "salt",
    "pepper",
    "black pepper",
    "olive oil",
    "vegetable oil",
    "oil",
    "water",
    "sugar",
    "flour",
    "butter",
]

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9 ]")


def normalize(name: str) -> str:
    """Lower-case, collapse whitespace, drop anything outside [a-z0-9 ], trim.

    Never fails and is idempotent: normalize(normalize(x)) == normalize(x).
    Stripping can leave double spaces behind ("salt & pepper"), so whitespace
    is collapsed again afterwards.
    """
    if not name:
        return ""
    text = _WHITESPACE.sub(" ", str(name).lower())
    text = _DISALLOWED.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


_STAPLES = frozenset(normalize(s) for s in PANTRY_STAPLES)


def is_pantry_staple(name: str) -> bool:
    """True if the ingredient is on the always-available staples list."""
    return normalize(name) in _STAPLES


def ingredient_name(ingredient) -> str:
    """Return the display name of a bare-string or structured ingredient.

    Malformed entries (no name) come back as "" so they can be reported as
    missing instead of raising.
    """
    if isinstance(ingredient, str):
        return ingredient
    if isinstance(ingredient, IngredientEntry):
        return ingredient.name or ""
    if isinstance(ingredient, dict):
        return ingredient.get("name") or ""
    return ""


def required_ingredients(recipe: Recipe) -> list[str]:
    """Names of the recipe's non-staple ingredients, in recipe order."""
    names = [ingredient_name(ing) for ing in recipe.ingredients or []]
    return [n for n in names if not n or not is_pantry_staple(n)]
