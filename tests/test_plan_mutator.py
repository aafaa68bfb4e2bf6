import copy
import random
from collections import Counter
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from dinner_planner.core.plan_editor import find_dangling_leftovers
from dinner_planner.core.plan_generator import generate_plan, regenerate_range, regenerate_week
from dinner_planner.models import EATING_OUT, LEFTOVERS, MEAL, DaySlot, Plan, Preferences, Recipe

START = date(2026, 3, 1)


def _plan_from_ids(ids):
    """'-' is eating out; 'A<3' is leftovers of A cooked on day 3; anything else is cooked."""
    days = []
    for i, token in enumerate(ids):
        day = START + timedelta(days=i)
        if token == "-":
            days.append(DaySlot(date=day, kind=EATING_OUT))
        elif "<" in token:
            recipe_id, src = token.split("<")
            days.append(DaySlot(date=day, kind=LEFTOVERS, recipe_id=recipe_id,
                                leftover_from_date=START + timedelta(days=int(src))))
        else:
            days.append(DaySlot(date=day, kind=MEAL, recipe_id=token))
    return Plan(id="plan", start_date=START, days=days, duration_count=len(ids) // 7)


def _recipes(*ids):
    return [Recipe(id=i, name=i) for i in ids]


@pytest.fixture
def month_plan(make_recipes, today):
    prefs = Preferences(duration="month", eating_out_days=4, leftover_days=4)
    return generate_plan(make_recipes(8), today, prefs, rng=random.Random(11))


def test_days_outside_range_untouched(month_plan, make_recipes):
    for seed in range(30):
        result = regenerate_week(month_plan, 1, make_recipes(8), rng=random.Random(seed))
        assert result.days[:7] == month_plan.days[:7]
        assert result.days[14:] == month_plan.days[14:]
        assert [d.date for d in result.days] == [d.date for d in month_plan.days]


def test_input_plan_not_mutated(month_plan, make_recipes):
    before = copy.deepcopy(month_plan)
    regenerate_week(month_plan, 2, make_recipes(8), rng=random.Random(0))
    assert month_plan == before


def test_counts_come_from_existing_range(month_plan, make_recipes):
    original = Counter(d.kind for d in month_plan.days[7:14])
    for seed in range(30):
        result = regenerate_week(month_plan, 1, make_recipes(8), Preferences(eating_out_days=0),
                                 rng=random.Random(seed))
        counts = Counter(d.kind for d in result.days[7:14])
        assert counts[EATING_OUT] == original[EATING_OUT]
        assert counts[LEFTOVERS] <= original[LEFTOVERS]


def test_leftover_count_kept_when_feasible():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "F", "G",
                           "A", "-", "B", "B<9", "C", "D", "E"])
    recipes = _recipes(*"ABCDEFGHIJ")
    for seed in range(50):
        result = regenerate_week(plan, 1, recipes, rng=random.Random(seed))
        counts = Counter(d.kind for d in result.days[7:])
        assert counts[EATING_OUT] == 1
        assert counts[LEFTOVERS] == 1
        assert find_dangling_leftovers(result) == []


def test_regenerated_plans_keep_leftover_rules(month_plan, make_recipes):
    for seed in range(50):
        rng = random.Random(seed)
        result = regenerate_week(month_plan, seed % 5, make_recipes(8), rng=rng)
        assert find_dangling_leftovers(result) == []
        for prev, day in zip(result.days, result.days[1:]):
            assert not (prev.kind == EATING_OUT and day.kind == LEFTOVERS)


def test_locked_days_are_kept(month_plan, make_recipes):
    locked = copy.deepcopy(month_plan)
    locked.days[8] = replace(locked.days[8], locked=True)
    locked.days[10] = replace(locked.days[10], locked=True)
    for seed in range(30):
        result = regenerate_week(locked, 1, make_recipes(8), rng=random.Random(seed))
        assert result.days[8] == locked.days[8]
        assert result.days[10] == locked.days[10]


def test_locked_leftovers_keep_their_source():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "F", "G",
                           "H", "I", "I<8", "J", "K", "L", "M"])
    plan.days[9] = replace(plan.days[9], locked=True)
    for seed in range(30):
        result = regenerate_week(plan, 1, _recipes(*"ABCDEFGHIJKLMNOP"), rng=random.Random(seed))
        assert result.days[8] == plan.days[8]
        assert result.days[9] == plan.days[9]
        assert result.days[7].kind != EATING_OUT or result.days[8].kind != LEFTOVERS
        assert find_dangling_leftovers(result) == []


def test_source_of_later_leftovers_is_kept():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "F", "G",
                           "H", "I", "J", "K", "L", "M", "N",
                           "N<13", "O", "P", "Q", "R", "S", "T"])
    for seed in range(30):
        result = regenerate_week(plan, 1, _recipes(*"ABCDEFGHIJKLMNOPQRST"), rng=random.Random(seed))
        assert result.days[13] == plan.days[13]
        assert result.days[14] == plan.days[14]
        assert find_dangling_leftovers(result) == []


def test_eating_out_not_placed_before_kept_leftovers():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "F", "G",
                           "-", "-", "-", "B", "C", "D", "E",
                           "G<6", "C", "D", "E", "F", "G", "A"])
    for seed in range(30):
        result = regenerate_week(plan, 1, _recipes(*"ABCDEFG"), rng=random.Random(seed))
        assert result.days[13].kind != EATING_OUT
        assert Counter(d.kind for d in result.days[7:14])[EATING_OUT] == 3
        assert result.days[14] == plan.days[14]


def test_source_pinning_keeps_eating_out_count():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "F", "G",
                           "-", "-", "-", "-", "-", "-", "B",
                           "B<13", "C", "D", "E", "F", "G", "A"])
    for seed in range(30):
        result = regenerate_week(plan, 1, _recipes(*"ABCDEFG"), rng=random.Random(seed))
        assert result.days[13] == plan.days[13]
        assert Counter(d.kind for d in result.days[7:13])[EATING_OUT] == 6


def test_avoids_recipes_from_neighbouring_weeks():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "A", "B",
                           "A", "B", "C", "D", "E", "A", "B",
                           "C", "D", "E", "A", "B", "C", "D"])
    recipes = _recipes(*"ABCDEFGHIJKL")
    for seed in range(30):
        result = regenerate_week(plan, 1, recipes, rng=random.Random(seed))
        assert {d.recipe_id for d in result.days[7:14]} <= set("FGHIJKL")


def test_falls_back_to_whole_pool_when_fresh_recipes_run_short():
    plan = _plan_from_ids(["A", "B", "C", "D", "E", "A", "B",
                           "A", "B", "C", "D", "E", "A", "B"])
    result = regenerate_week(plan, 1, _recipes(*"ABCDEF"), rng=random.Random(2))
    assert all(d.recipe_id for d in result.days[7:])
    assert len({d.recipe_id for d in result.days[7:]}) == 6


def test_range_is_clamped(month_plan, make_recipes):
    result = regenerate_range(month_plan, 25, 99, make_recipes(8), rng=random.Random(1))
    assert len(result.days) == 30
    assert result.days[:25] == month_plan.days[:25]
    empty = regenerate_range(month_plan, 40, 50, make_recipes(8))
    assert empty.days == month_plan.days


def test_week_index_out_of_range(month_plan, make_recipes):
    with pytest.raises(IndexError):
        regenerate_week(month_plan, 5, make_recipes(8))
    with pytest.raises(IndexError):
        regenerate_week(month_plan, -1, make_recipes(8))


def test_last_partial_week(month_plan, make_recipes):
    result = regenerate_week(month_plan, 4, make_recipes(8), rng=random.Random(4))
    assert result.days[:28] == month_plan.days[:28]
    assert len(result.days) == 30


def test_modified_at_updated(month_plan, make_recipes):
    now = datetime(2026, 4, 1, tzinfo=timezone.utc)
    result = regenerate_week(month_plan, 0, make_recipes(8), now=now)
    assert result.modified_at == now
    assert result.created_at == month_plan.created_at
    assert result.id == month_plan.id
