"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from nomineeadmin.api.state import AppState, get_state
from nomineeadmin.config import CORS_ORIGINS
from nomineeadmin.core.gateway import GatewayError

# Import routes after state to avoid circular imports
from nomineeadmin.api.routes import editor, nominations

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = get_state()
    try:
        await state.nominations.refresh()
    except GatewayError as e:
        # Console still starts; GET /api/nominations?refresh=true retries
        logger.warning("Initial nomination load failed: %s", e.message)

    yield

    await state.gateway.aclose()


app = FastAPI(
    title="Nominee Admin API",
    description="Admin console backend for award nominations",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(nominations.router, prefix="/api/nominations", tags=["nominations"])
app.include_router(editor.router, prefix="/api/editor", tags=["editor"])


@app.get("/api/health", include_in_schema=False)
def health():
    return {"status": "ok"}
