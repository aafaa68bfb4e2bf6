"""Pantry-based recipe recommendations: score, rank, and bucket recipes.

score_recipe() works out what share of a recipe's non-staple ingredients
are in the pantry and whether any of them is about to expire.
rank_recipes() scores the whole library and orders it so that recipes using
expiring food come first, then the best matches, then the quickest.
"""

import math
from datetime import date, datetime
from typing import Optional

from dinner_planner.config import get_settings
from dinner_planner.core.ingredients import required_ingredients
from dinner_planner.core.matcher import PantryIndex
from dinner_planner.models import MatchResult, PantryItem, Recipe

# Sort key for recipes whose prep time is unknown (0).
UNKNOWN_PREP_TIME = 999

CATEGORY_RANGES = {
    "can_make_now": (100, 100),
    "almost_there": (80, 99),
    "missing_several": (50, 79),
    "not_feasible": (0, 49),
}


def prep_time_key(recipe: Recipe) -> int:
    """Prep time in minutes, with unknown (0 or missing) sorting last."""
    return recipe.prep_time or UNKNOWN_PREP_TIME


def _as_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _is_expiring(item: PantryItem, today: date, within_days: int) -> bool:
    expires = _as_date(item.expiration_date)
    if expires is None:
        return False
    return 0 <= (expires - today).days <= within_days


def score_recipe(
    recipe: Recipe,
    pantry: list[PantryItem],
    today: date = None,
    index: PantryIndex = None,
) -> MatchResult:
    """Compute how much of the recipe can be made from the pantry.

    The score is round-half-up of 100 * available / required.  A recipe with
    no non-staple ingredients is a 100% match with empty lists.  Pass an
    existing index to reuse it across many recipes of the same pantry.
    """
    required = required_ingredients(recipe)
    if not required:
        return MatchResult(recipe=recipe, match_score=100)

    settings = get_settings()
    if index is None:
        index = PantryIndex(pantry, settings.match_threshold)
    today = _as_date(today) or date.today()

    available, missing = [], []
    expiring = False
    for name in required:
        matches = index.lookup(name)
        if matches:
            available.append(name)
            if not expiring:
                expiring = _is_expiring(matches[0], today, settings.expiring_within_days)
        else:
            missing.append(name)

    score = math.floor(100 * len(available) / len(required) + 0.5)
    return MatchResult(
        recipe=recipe,
        match_score=score,
        available_ingredients=available,
        missing_ingredients=missing,
        has_expiring_ingredients=expiring,
    )


def rank_recipes(recipes: list[Recipe], pantry: list[PantryItem], today: date = None) -> list[MatchResult]:
    """Score every recipe and sort: expiring first, best score, quickest prep.

    The sort is stable, so ties keep the library's order.
    """
    index = PantryIndex(pantry)
    results = [score_recipe(r, pantry, today=today, index=index) for r in recipes]
    return sorted(
        results,
        key=lambda r: (not r.has_expiring_ingredients, -r.match_score, prep_time_key(r.recipe)),
    )


def categorize(results: list[MatchResult]) -> dict[str, list[MatchResult]]:
    """Bucket results by score; every result lands in exactly one bucket."""
    buckets = {name: [] for name in CATEGORY_RANGES}
    for result in results:
        for name, (low, high) in CATEGORY_RANGES.items():
            if low <= result.match_score <= high:
                buckets[name].append(result)
                break
    return buckets


def filter_by_score(results: list[MatchResult], min_score: int = 0) -> list[MatchResult]:
    """Keep results scoring at least min_score, preserving order."""
    return [r for r in results if r.match_score >= min_score]
