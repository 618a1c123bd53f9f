import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.goals import router as goals_router
from app.api.habits import router as habits_router
from app.core.config import settings
from app.core.errors import TrackerError
from app.db import Base, engine
from app.models.goal import Goal  # noqa: F401  (import ensures table is registered)
from app.models.habit import Habit  # noqa: F401
from app.models.habit_log import HabitLog  # noqa: F401
from app.stores.locks import OwnerLocks


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="DynProt tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (goals, habits, habit_logs) on startup
Base.metadata.create_all(bind=engine)

# One lock registry per app; goal writes are serialized per owner through it
app.state.owner_locks = OwnerLocks()

app.include_router(goals_router)
app.include_router(habits_router)


@app.exception_handler(TrackerError)
def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
def root():
    return {"message": "DynProt tracker backend is running"}
