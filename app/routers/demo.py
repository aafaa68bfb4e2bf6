"""Demo router: recommendations and a plan computed from the built-in demo data.

Nothing is posted; the recipe library and pantry come from demo/seed.py, with
pantry expiry dates relative to today.
"""
import random
from datetime import date

from fastapi import APIRouter, HTTPException

from app.routers.recommendations import recommendation_payload
from demo.seed import DEMO_RECIPES, demo_pantry
from dinner_planner.core.plan_generator import generate_plan
from dinner_planner.models import Preferences

router = APIRouter(prefix="/demo", tags=["demo"])


@router.get("/recommendations")
def demo_recommendations(min_score: int = 0):
    today = date.today()
    return recommendation_payload(DEMO_RECIPES, demo_pantry(today), today=today, min_score=min_score)


@router.get("/plan")
def demo_plan(duration: str = "week", count: int = 1, eating_out: int = 1, leftovers: int = 1,
              seed: int = None):
    prefs = Preferences(
        duration=duration,
        duration_count=count,
        eating_out_days=eating_out,
        leftover_days=leftovers,
    )
    try:
        return generate_plan(DEMO_RECIPES, prefs=prefs, rng=random.Random(seed))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
