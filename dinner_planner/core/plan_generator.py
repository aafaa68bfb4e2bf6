"""Calendar plan generation: cooked meals, eating out, and leftovers.

A plan is one DaySlot per calendar day.  Weekly plans start on the Sunday on
or before the anchor date; monthly plans start on the first of the anchor's
month and are always 30 days per month (an approximation, not real month
lengths).

Placement rules:
  * eating-out days are a uniform random sample of the days;
  * every other day gets a recipe drawn from a RecipeDeck, so no recipe
    repeats until the whole pool has been used;
  * a day may become leftovers only if the day before is not eating out and
    at least two earlier days are cooked meals.  It reuses the recipe of the
    most recent earlier cooked meal and records that day's date.

Randomness comes from an injected random.Random so tests can seed it.
"""

import logging
import random
import uuid
from collections import deque
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dinner_planner.core.recommendations import prep_time_key
from dinner_planner.models import (
    EATING_OUT, LEFTOVERS, MEAL,
    DaySlot, Plan, Preferences, Recipe,
)

logger = logging.getLogger(__name__)

DAYS_PER_UNIT = {"week": 7, "month": 30}
DAYS_PER_WEEK = 7


def get_week_start(for_date: date = None) -> date:
    """Returns the Sunday on or before for_date."""
    if for_date is None:
        for_date = date.today()
    return for_date - timedelta(days=(for_date.weekday() + 1) % 7)


def plan_window(anchor: date, duration: str, count: int) -> tuple[date, int]:
    """Return (start_date, total_days) for a plan anchored on the given date."""
    if duration not in DAYS_PER_UNIT:
        raise ValueError(f"Unknown plan duration {duration!r}; expected 'week' or 'month'")
    if duration == "week":
        start = get_week_start(anchor)
    else:
        start = anchor.replace(day=1)
    return start, max(count, 0) * DAYS_PER_UNIT[duration]


def eligible_recipes(recipes: list[Recipe], prefs: Preferences) -> list[Recipe]:
    """Drop excluded recipes; quickest first when the user prefers quick meals."""
    excluded = set(prefs.excluded_recipe_ids or [])
    pool = [r for r in recipes if r.id not in excluded]
    if prefs.prefer_quick_recipes:
        pool.sort(key=prep_time_key)
    return pool


class RecipeDeck:
    """Shuffled draw pile of recipes, refilled with a fresh shuffle when empty.

    Every recipe is drawn once per pass through the pool.  A fresh shuffle
    never starts with the recipe drawn last, unless the pool has only one.
    With quick_first, each fresh shuffle is reordered by prep time, keeping
    the random order among equal prep times.
    """

    def __init__(self, pool: list[Recipe], rng: random.Random,
                 quick_first: bool = False, last_recipe_id: Optional[str] = None):
        self._pool = list(pool)
        self._rng = rng
        self._quick_first = quick_first
        self._cards = deque()
        self.last_recipe_id = last_recipe_id

    def __len__(self) -> int:
        return len(self._pool)

    def _refill(self) -> None:
        cards = list(self._pool)
        self._rng.shuffle(cards)
        if self._quick_first:
            cards.sort(key=prep_time_key)
        self._cards = deque(cards)
        if len(self._cards) > 1 and self._cards[0].id == self.last_recipe_id:
            self._cards.rotate(-1)

    def draw(self) -> Optional[Recipe]:
        """Next recipe, or None if the pool is empty."""
        if not self._pool:
            return None
        if not self._cards:
            self._refill()
        recipe = self._cards.popleft()
        self.last_recipe_id = recipe.id
        return recipe


def _latest_cooked(days: list[DaySlot], index: int) -> Optional[int]:
    """Index of the most recent cooked meal with a recipe before index."""
    for i in range(index - 1, -1, -1):
        if days[i].kind == MEAL and days[i].recipe_id:
            return i
    return None


def _place_eating_out(days, positions, count, rng) -> set[int]:
    # A kept leftovers day must not end up right after an eating-out day.
    open_positions = set(positions)
    allowed = [
        i for i in positions
        if i + 1 >= len(days) or i + 1 in open_positions or days[i + 1].kind != LEFTOVERS
    ]
    count = min(max(count, 0), len(allowed))
    return set(rng.sample(allowed, count))


def _convert_leftovers(days, positions, count, rng) -> int:
    meals_before = [0] * (len(days) + 1)
    for i, day in enumerate(days):
        meals_before[i + 1] = meals_before[i] + (day.kind == MEAL)

    candidates = [
        i for i in positions
        if days[i].kind != EATING_OUT
        and (i == 0 or days[i - 1].kind != EATING_OUT)
        and meals_before[i] >= 2
    ]
    chosen = rng.sample(candidates, min(max(count, 0), len(candidates)))

    # Ascending order: a converted day is never the source of an earlier one.
    converted = 0
    for i in sorted(chosen):
        src = _latest_cooked(days, i)
        if src is None:
            continue
        days[i] = replace(
            days[i],
            kind=LEFTOVERS,
            recipe_id=days[src].recipe_id,
            leftover_from_date=days[src].date,
        )
        converted += 1
    return converted


def _lay_out(days, positions, eating_out_count, leftover_count, deck, rng) -> tuple[int, int]:
    """Reassign days[i] for every i in positions (ascending). Mutates days."""
    eating_out = _place_eating_out(days, positions, eating_out_count, rng)
    for i in positions:
        if i in eating_out:
            days[i] = DaySlot(date=days[i].date, kind=EATING_OUT)
        else:
            recipe = deck.draw()
            days[i] = DaySlot(date=days[i].date, kind=MEAL, recipe_id=recipe.id if recipe else None)
    leftovers = _convert_leftovers(days, positions, leftover_count, rng)
    return len(eating_out), leftovers


def generate_plan(
    recipes: list[Recipe],
    anchor_date: date = None,
    prefs: Preferences = None,
    rng: random.Random = None,
    now: datetime = None,
) -> Plan:
    """Build a new plan covering the whole preferred duration.

    Requests for more eating-out or leftover days than fit are clamped.  With
    no eligible recipes, cooked days keep recipe_id=None so the caller can ask
    for more recipes.
    """
    if prefs is None:
        prefs = Preferences()
    if rng is None:
        rng = random.Random()
    if anchor_date is None:
        anchor_date = date.today()
    if now is None:
        now = datetime.now(timezone.utc)

    start, total_days = plan_window(anchor_date, prefs.duration, prefs.duration_count)
    pool = eligible_recipes(recipes, prefs)
    if not pool and total_days > max(prefs.eating_out_days, 0):
        logger.warning("No eligible recipes: %d-day plan will have meal days without a recipe", total_days)

    days = [DaySlot(date=start + timedelta(days=i)) for i in range(total_days)]
    deck = RecipeDeck(pool, rng, quick_first=prefs.prefer_quick_recipes)
    eating_out, leftovers = _lay_out(
        days, list(range(total_days)), prefs.eating_out_days, prefs.leftover_days, deck, rng,
    )
    logger.debug(
        "Generated plan from %s: %d days, %d eating out, %d leftovers, pool of %d",
        start, total_days, eating_out, leftovers, len(pool),
    )
    return Plan(
        id=uuid.uuid4().hex,
        start_date=start,
        days=days,
        duration=prefs.duration,
        duration_count=prefs.duration_count,
        created_at=now,
        modified_at=now,
    )


def _pinned_indices(days: list[DaySlot], start: int, end: int) -> set[int]:
    """Days in [start, end) that regeneration must keep.

    Locked days, plus any day whose meal feeds a leftovers day that is itself
    kept (outside the range or pinned).
    """
    pinned = {i for i in range(start, end) if days[i].locked}
    by_date = {d.date: i for i, d in enumerate(days)}
    pending = [i for i, d in enumerate(days) if not start <= i < end or i in pinned]
    while pending:
        i = pending.pop()
        if days[i].kind != LEFTOVERS:
            continue
        src = by_date.get(days[i].leftover_from_date)
        if src is not None and start <= src < end and src not in pinned:
            pinned.add(src)
            pending.append(src)
    return pinned


def _nearby_recipe_ids(days: list[DaySlot], start: int, end: int) -> set[str]:
    """Recipes cooked in the week before and the week after [start, end)."""
    nearby = days[max(0, start - DAYS_PER_WEEK):start] + days[end:end + DAYS_PER_WEEK]
    return {d.recipe_id for d in nearby if d.kind == MEAL and d.recipe_id}


def regenerate_range(
    plan: Plan,
    start: int,
    end: int,
    recipes: list[Recipe],
    prefs: Preferences = None,
    rng: random.Random = None,
    now: datetime = None,
) -> Plan:
    """Return a copy of plan with days[start:end] laid out again.

    The eating-out and leftover counts come from the days being replaced, not
    from prefs.  Locked days and days outside the range are kept as-is.
    Recipes cooked in the neighbouring weeks are avoided when the rest of the
    pool is large enough.
    """
    if prefs is None:
        prefs = Preferences()
    if rng is None:
        rng = random.Random()
    if now is None:
        now = datetime.now(timezone.utc)

    n = len(plan.days)
    start = max(0, min(start, n))
    end = max(start, min(end, n))
    days = [replace(d) for d in plan.days]

    pinned = _pinned_indices(days, start, end)
    positions = [i for i in range(start, end) if i not in pinned]
    eating_out_count = sum(1 for i in positions if days[i].kind == EATING_OUT)
    leftover_count = sum(1 for i in positions if days[i].kind == LEFTOVERS)
    meal_slots = len(positions) - eating_out_count

    pool = eligible_recipes(recipes, prefs)
    nearby = _nearby_recipe_ids(days, start, end)
    fresh = [r for r in pool if r.id not in nearby]
    if fresh and len(fresh) >= meal_slots:
        pool = fresh

    last_recipe_id = days[start - 1].recipe_id if start > 0 else None
    deck = RecipeDeck(pool, rng, quick_first=prefs.prefer_quick_recipes, last_recipe_id=last_recipe_id)
    _lay_out(days, positions, eating_out_count, leftover_count, deck, rng)
    logger.debug(
        "Regenerated days %d-%d of plan %s: %d kept, %d eating out, %d leftovers",
        start, end, plan.id, len(pinned), eating_out_count, leftover_count,
    )
    return replace(plan, days=days, modified_at=now)


def regenerate_week(
    plan: Plan,
    week_index: int,
    recipes: list[Recipe],
    prefs: Preferences = None,
    rng: random.Random = None,
    now: datetime = None,
) -> Plan:
    """Regenerate the week_index-th block of seven days (the last may be shorter)."""
    start = week_index * DAYS_PER_WEEK
    if week_index < 0 or start >= len(plan.days):
        raise IndexError(f"Week {week_index} is outside a {len(plan.days)}-day plan")
    return regenerate_range(plan, start, start + DAYS_PER_WEEK, recipes, prefs, rng=rng, now=now)
