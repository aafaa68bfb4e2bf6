import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from dinner_planner.config import get_settings
from app.routers import demo, plans, recommendations, settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    yield


app = FastAPI(title="Dinner Planner", lifespan=lifespan)

app.include_router(recommendations.router)
app.include_router(plans.router)
app.include_router(settings.router)
app.include_router(demo.router)
