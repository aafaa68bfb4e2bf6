import random

from fastapi import APIRouter, HTTPException

from app.schemas import (
    GenerateRequest, RegenerateRequest, RegenerateWeekRequest, RelinkRequest, SwapRequest,
)
from dinner_planner.core import plan_editor, plan_generator

router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("/generate")
def plan_generate(payload: GenerateRequest):
    try:
        return plan_generator.generate_plan(
            payload.recipes,
            anchor_date=payload.anchor_date,
            prefs=payload.preferences,
            rng=random.Random(payload.seed),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/regenerate")
def plan_regenerate(payload: RegenerateRequest):
    return plan_generator.regenerate_range(
        payload.plan,
        payload.start_index,
        payload.end_index,
        payload.recipes,
        payload.preferences,
        rng=random.Random(payload.seed),
    )


@router.post("/regenerate-week")
def plan_regenerate_week(payload: RegenerateWeekRequest):
    try:
        return plan_generator.regenerate_week(
            payload.plan,
            payload.week_index,
            payload.recipes,
            payload.preferences,
            rng=random.Random(payload.seed),
        )
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/swap")
def plan_swap(payload: SwapRequest):
    try:
        plan, unresolved = plan_editor.swap_days(payload.plan, payload.first_index, payload.second_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"plan": plan, "unresolved": unresolved}


@router.post("/relink")
def plan_relink(payload: RelinkRequest):
    plan, unresolved = plan_editor.relink_leftovers(payload.plan)
    return {"plan": plan, "unresolved": unresolved}
