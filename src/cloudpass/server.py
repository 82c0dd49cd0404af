import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from cloudpass.application.config import resolve_config
from cloudpass.application.factory import get_practice_service
from cloudpass.consts import VERSION
from cloudpass.domain.practice.models import MasteryStats, Question
from cloudpass.domain.practice.ports import MasteryStoreError, QuestionBankError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cloudpass.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"cloudpass server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("cloudpass server shutting down...")


app = FastAPI(
    title="cloudpass",
    description="Adaptive question selection for practice sessions.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class QuestionOut(BaseModel):
    id: str
    domain_id: int
    text: str
    options: dict[str, str]
    answer: str | list[str]
    explanation: str
    source: str
    is_multi_answer: bool

    @classmethod
    def from_question(cls, q: Question) -> "QuestionOut":
        return cls(
            id=q.id,
            domain_id=q.domain_id,
            text=q.text,
            options=q.options,
            answer=q.answer,
            explanation=q.explanation,
            source=q.source,
            is_multi_answer=q.is_multi_answer,
        )


class StatsOut(BaseModel):
    new: int
    learning: int
    struggling: int
    mastered: int

    @classmethod
    def from_stats(cls, s: MasteryStats) -> "StatsOut":
        return cls(new=s.new, learning=s.learning, struggling=s.struggling, mastered=s.mastered)


class SelectRequest(BaseModel):
    domain_id: int
    count: int | None = Field(default=None, ge=0)
    user_id: str | None = None  # None = guest session


class SelectResponse(BaseModel):
    questions: list[QuestionOut]
    stats: StatsOut | None = None


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.post("/practice/select", response_model=SelectResponse)
async def select_practice_questions(req: SelectRequest):
    """
    Pick the questions for a new practice session.
    """
    config = resolve_config()
    service = get_practice_service(config)
    count = req.count if req.count is not None else config.session_size

    try:
        result = await service.start_session(req.domain_id, count, req.user_id)
    except QuestionBankError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return SelectResponse(
        questions=[QuestionOut.from_question(q) for q in result.questions],
        stats=StatsOut.from_stats(result.stats) if result.stats else None,
    )


@app.get("/practice/stats/{domain_id}", response_model=StatsOut)
async def get_domain_stats(domain_id: int, user_id: str):
    """Mastery category counts for one user across a domain."""
    service = get_practice_service(resolve_config())

    try:
        stats = await service.domain_stats(domain_id, user_id)
    except QuestionBankError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except MasteryStoreError as e:
        logger.error(f"Stats lookup failed: {e}")
        raise HTTPException(status_code=503, detail=str(e)) from e

    return StatsOut.from_stats(stats)
