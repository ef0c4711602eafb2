"""Bot download/upload routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from chat_memory.api.dependencies import get_bot_service
from chat_memory.bots import BotService
from chat_memory.core.logging import get_logger
from chat_memory.models.dto import Bot, ImportBotResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/download/{chat_id}", response_model=Bot, summary="Export a chat as a portable bot")
async def download_bot(chat_id: str, service: BotService = Depends(get_bot_service)) -> Bot:
    logger.debug("Received call to download a bot")
    return service.export_bot(chat_id)


@router.post(
    "/upload",
    response_model=ImportBotResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Import a portable bot as a new chat",
)
async def upload_bot(
    bot: Bot,
    user_id: str = Query(..., min_length=1, description="Owner of the imported chat"),
    resume_chat_id: str | None = Query(None, description="Chat created by an earlier, interrupted upload"),
    service: BotService = Depends(get_bot_service),
) -> ImportBotResponse:
    logger.debug("Received call to upload a bot")
    summary = service.import_bot(user_id, bot, resume_chat_id=resume_chat_id)
    return ImportBotResponse(
        chat_id=summary.chat_id,
        messages=summary.messages,
        collections=summary.collections,
        records=summary.records,
    )


__all__ = ["router"]
