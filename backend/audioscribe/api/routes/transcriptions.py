from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from audioscribe.core.exceptions import InternalError, StoreError, ValidationError
from audioscribe.crud.crud_transcription import transcription_crud
from audioscribe.db.session import get_db
from audioscribe.schemas.transcription import TranscriptionListResponse, TranscriptionSummary

router = APIRouter()


@router.get("/transcriptions/{user_id}", response_model=TranscriptionListResponse)
async def list_transcriptions(
        user_id: str,
        db: AsyncSession = Depends(get_db),
) -> Any:
    """
    List the transcripts saved for a user
    """
    if not user_id.strip():
        raise ValidationError("User ID is required")

    try:
        records = await transcription_crud.list_by_user(db, user_id)
    except StoreError as e:
        logger.error(f"Store error listing transcriptions for {user_id}: {e.message}")
        raise InternalError("Database query failed", details=e.message)

    return TranscriptionListResponse(
        transcriptions=[TranscriptionSummary.model_validate(r) for r in records]
    )
