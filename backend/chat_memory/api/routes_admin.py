"""Administrative routes for chat-memory."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chat_memory.api.dependencies import get_memory_store
from chat_memory.core.metrics import metrics_response
from chat_memory.memory.store import SQLiteMemoryStore

router = APIRouter()


@router.get("/collections", response_model=list[str], summary="List memory collections")
async def list_collections(store: SQLiteMemoryStore = Depends(get_memory_store)) -> list[str]:
    return store.list_collections()


@router.get("/metrics", summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()


__all__ = ["router"]
