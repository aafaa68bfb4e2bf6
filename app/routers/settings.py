from dataclasses import asdict

from fastapi import APIRouter

from dinner_planner.config import get_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
def read_settings():
    return asdict(get_settings())
