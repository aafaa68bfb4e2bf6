from fastapi import APIRouter

from app.schemas import RecommendationRequest
from dinner_planner.core.recommendations import categorize, filter_by_score, rank_recipes

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def recommendation_payload(recipes, pantry, today=None, min_score: int = 0) -> dict:
    """Ranked results plus the same results bucketed by score."""
    results = filter_by_score(rank_recipes(recipes, pantry, today=today), min_score)
    return {"results": results, "categories": categorize(results)}


@router.post("")
def recommend(payload: RecommendationRequest):
    return recommendation_payload(
        payload.recipes, payload.pantry, today=payload.today, min_score=payload.min_score,
    )
