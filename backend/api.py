# backend/api.py
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agents.config import config
from agents.task_agent import TaskExtractionAgent
from backend.database import init_db
from backend.dependencies import get_task_agent
from backend.errors import register_error_handlers
from backend.routes import tasks, transcripts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    try:
        config.validate_config()
    except ValueError as e:
        # Transcripts still work, they just get the fallback task set
        logger.warning(f"LLM configuration incomplete: {e}")
    logger.info(f"InsightBoard API ready (LLM provider: {config.llm_provider})")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="InsightBoard API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in config.get("CORS_ORIGIN").split(",") if origin.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "OK", "message": "Server is running"}

    @app.get("/health/llm")
    async def llm_health(agent: TaskExtractionAgent = Depends(get_task_agent)):
        connected = await asyncio.to_thread(agent.test_connection)
        return {**agent.get_status(), "provider": config.llm_provider, "connected": connected}

    app.include_router(transcripts.router)
    app.include_router(tasks.router)
    register_error_handlers(app)
    return app


app = create_app()
