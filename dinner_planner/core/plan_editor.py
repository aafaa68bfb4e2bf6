"""Manual plan edits: change, lock, and swap days, and repair leftovers.

Every function returns a new Plan and leaves the one passed in untouched.
Edits can break the leftovers invariant (a leftovers day must point at an
earlier cooked day with the same recipe); find_dangling_leftovers() reports
such days and relink_leftovers() fixes what it can.
"""

from dataclasses import replace
from datetime import datetime, timezone

from dinner_planner.models import EATING_OUT, LEFTOVERS, MEAL, SLOT_KINDS, DaySlot, Plan


def _touch(plan: Plan, days: list[DaySlot], now: datetime = None) -> Plan:
    return replace(plan, days=days, modified_at=now or datetime.now(timezone.utc))


def _check_index(plan: Plan, index: int) -> None:
    if not 0 <= index < len(plan.days):
        raise IndexError(f"Day {index} is outside a {len(plan.days)}-day plan")


def _follow_source(days: list[DaySlot], source: int) -> None:
    """Point leftovers of days[source] at its current recipe."""
    src = days[source]
    for i in range(source + 1, len(days)):
        if days[i].kind == LEFTOVERS and days[i].leftover_from_date == src.date:
            days[i] = replace(days[i], recipe_id=src.recipe_id)


def update_day(plan: Plan, index: int, now: datetime = None, **changes) -> tuple[Plan, list[int]]:
    """Replace fields of one day, then relink any leftovers the change broke.

    The date of a day cannot change.  Returns the plan and the leftovers days
    that still need a meal picked by hand.
    """
    _check_index(plan, index)
    if "date" in changes:
        raise ValueError("A day's date cannot be edited")
    if "kind" in changes and changes["kind"] not in SLOT_KINDS:
        raise ValueError(f"Unknown day kind {changes['kind']!r}")
    days = list(plan.days)
    days[index] = replace(days[index], **changes)
    return relink_leftovers(_touch(plan, days, now), now=now)


def toggle_lock(plan: Plan, index: int, now: datetime = None) -> Plan:
    _check_index(plan, index)
    days = list(plan.days)
    days[index] = replace(days[index], locked=not days[index].locked)
    return _touch(plan, days, now)


def set_day_recipe(plan: Plan, index: int, recipe_id: str, now: datetime = None) -> Plan:
    """Make the day a cooked meal of recipe_id; its leftovers follow the new recipe."""
    _check_index(plan, index)
    days = list(plan.days)
    days[index] = replace(days[index], kind=MEAL, recipe_id=recipe_id, leftover_from_date=None)
    _follow_source(days, index)
    return _touch(plan, days, now)


def set_day_kind(plan: Plan, index: int, kind: str, now: datetime = None) -> tuple[Plan, list[int]]:
    """Change what happens on a day.

    eating_out clears the recipe.  leftovers reuses the most recent earlier
    cooked meal and raises ValueError if there is none.  meal keeps whatever
    recipe the day already had.  Leftovers of this day that lose their source
    are relinked; the ones that could not be are returned with the plan.
    """
    _check_index(plan, index)
    if kind not in SLOT_KINDS:
        raise ValueError(f"Unknown day kind {kind!r}")
    days = list(plan.days)
    day = days[index]
    if kind == EATING_OUT:
        days[index] = replace(day, kind=EATING_OUT, recipe_id=None, leftover_from_date=None)
    elif kind == LEFTOVERS:
        src = _nearest_cooked(days, index, skip=(EATING_OUT, LEFTOVERS, MEAL))
        if src is None:
            raise ValueError(f"No cooked meal before {day.date} to take leftovers from")
        days[index] = replace(
            day, kind=LEFTOVERS, recipe_id=days[src].recipe_id, leftover_from_date=days[src].date,
        )
    else:
        days[index] = replace(day, kind=MEAL, leftover_from_date=None)
        _follow_source(days, index)
    return relink_leftovers(_touch(plan, days, now), now=now)


def _nearest_cooked(days: list[DaySlot], index: int, skip=(EATING_OUT, LEFTOVERS)):
    """Walk back from index to the nearest cooked meal with a recipe.

    Days whose kind is in skip are stepped over; any other day ends the walk.
    """
    for i in range(index - 1, -1, -1):
        day = days[i]
        if day.kind == MEAL and day.recipe_id:
            return i
        if day.kind not in skip:
            return None
    return None


def find_dangling_leftovers(plan: Plan) -> list[int]:
    """Indexes of leftovers days without a valid earlier cooked source."""
    by_date = {d.date: i for i, d in enumerate(plan.days)}
    dangling = []
    for i, day in enumerate(plan.days):
        if day.kind != LEFTOVERS:
            continue
        src = by_date.get(day.leftover_from_date)
        valid = (
            src is not None
            and src < i
            and plan.days[src].kind == MEAL
            and plan.days[src].recipe_id is not None
            and plan.days[src].recipe_id == day.recipe_id
        )
        if not valid:
            dangling.append(i)
    return dangling


def relink_leftovers(plan: Plan, now: datetime = None) -> tuple[Plan, list[int]]:
    """Re-point dangling leftovers at the nearest earlier cooked meal.

    The walk back steps over eating-out and leftovers days; a cooked day with
    no recipe stops it.  Days that cannot be linked are returned so the user
    can pick the meal (see resolve_leftover).
    """
    dangling = find_dangling_leftovers(plan)
    if not dangling:
        return plan, []
    days = list(plan.days)
    unresolved = []
    for i in dangling:
        src = _nearest_cooked(days, i)
        if src is None:
            unresolved.append(i)
            continue
        days[i] = replace(days[i], recipe_id=days[src].recipe_id, leftover_from_date=days[src].date)
    return _touch(plan, days, now), unresolved


def resolve_leftover(plan: Plan, index: int, recipe_id: str, now: datetime = None) -> Plan:
    """Make a day leftovers of the most recent earlier cooking of recipe_id."""
    _check_index(plan, index)
    days = list(plan.days)
    for i in range(index - 1, -1, -1):
        if days[i].kind == MEAL and days[i].recipe_id == recipe_id:
            days[index] = replace(
                days[index], kind=LEFTOVERS, recipe_id=recipe_id, leftover_from_date=days[i].date,
            )
            return _touch(plan, days, now)
    raise ValueError(f"Recipe {recipe_id!r} is not cooked before {days[index].date}")


def swap_days(plan: Plan, first: int, second: int, now: datetime = None) -> tuple[Plan, list[int]]:
    """Swap what happens on two days, as when dragging one day onto another.

    Dates and lock flags stay with their calendar day.  Leftovers broken by
    the move are relinked; the ones that could not be are returned.
    """
    _check_index(plan, first)
    _check_index(plan, second)
    days = list(plan.days)
    a, b = days[first], days[second]
    days[first] = replace(a, kind=b.kind, recipe_id=b.recipe_id,
                          leftover_from_date=b.leftover_from_date, note=b.note)
    days[second] = replace(b, kind=a.kind, recipe_id=a.recipe_id,
                           leftover_from_date=a.leftover_from_date, note=a.note)
    return relink_leftovers(_touch(plan, days, now), now=now)
