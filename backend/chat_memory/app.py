"""FastAPI application setup for chat-memory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_memory.api.dependencies import get_app_settings, get_bot_service, get_database, get_semantic_memory
from chat_memory.api.routes_admin import router as admin_router
from chat_memory.api.routes_bot import router as bot_router
from chat_memory.api.routes_chat import router as chat_router
from chat_memory.core.errors import (
    ChatMemoryError,
    DependencyError,
    EmptyHistoryError,
    IncompatibleSchemaError,
    InvalidSnapshotError,
    NotFoundError,
)
from chat_memory.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

_ERROR_STATUS: dict[type[ChatMemoryError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    IncompatibleSchemaError: status.HTTP_400_BAD_REQUEST,
    EmptyHistoryError: status.HTTP_400_BAD_REQUEST,
    InvalidSnapshotError: status.HTTP_400_BAD_REQUEST,
    DependencyError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Apply logging settings and warm up core singletons on startup."""
    settings = get_app_settings()
    configure_logging(settings.log_level, use_json=settings.log_json)
    get_database()
    get_semantic_memory()
    get_bot_service()
    yield


app = FastAPI(
    title="Chat Memory",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(chat_router, prefix="/chats", tags=["chats"])
app.include_router(bot_router, prefix="/bot", tags=["bot"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.exception_handler(ChatMemoryError)
async def handle_chat_memory_error(request: Request, exc: ChatMemoryError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
