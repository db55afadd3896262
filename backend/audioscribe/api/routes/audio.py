from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from audioscribe.api.deps import (
    get_app_settings, get_storage_service, get_transcription_service, read_upload
)
from audioscribe.core.config import Settings
from audioscribe.core.exceptions import (
    InternalError, StorageError, StoreError, TranscriptionError, ValidationError
)
from audioscribe.crud.crud_transcription import transcription_crud
from audioscribe.db.session import get_db
from audioscribe.schemas.transcription import TranscribeResponse, TranscriptionOut, UploadResponse
from audioscribe.services.storage_service import StorageService
from audioscribe.services.transcription_service import TranscriptionService
from audioscribe.utils.security import is_valid_user_id

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_audio(
        audio: Optional[UploadFile] = File(None),
        settings: Settings = Depends(get_app_settings),
        storage: StorageService = Depends(get_storage_service),
) -> Any:
    """
    Store an audio file in the bucket and return its public URL
    """
    data = await read_upload(audio, settings.MAX_UPLOAD_SIZE)

    try:
        file_url = await storage.store(data, audio.filename, audio.content_type)
    except StorageError as e:
        raise InternalError("Failed to upload to storage", details=e.message)

    return UploadResponse(file_url=file_url)


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe_audio(
        audio: Optional[UploadFile] = File(None),
        user_id: Optional[str] = Form(None, alias="userId"),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_app_settings),
        transcriber: TranscriptionService = Depends(get_transcription_service),
) -> Any:
    """
    Transcribe an audio file and save the transcript for the user
    """
    data = await read_upload(audio, settings.MAX_UPLOAD_SIZE)

    if not user_id:
        raise ValidationError("User ID is required")
    if not is_valid_user_id(user_id):
        raise ValidationError("Invalid UUID format for userId")

    try:
        transcript = await transcriber.transcribe(data, audio.content_type)

        # The record keeps the client's filename, the audio itself is not stored here
        saved = await transcription_crud.create(
            db, user_id=user_id, transcript=transcript, file_url=audio.filename
        )
    except (TranscriptionError, StoreError) as e:
        logger.error(f"Error transcribing audio for user {user_id}: {e.message}")
        raise InternalError("Error transcribing audio", details=e.message)

    return TranscribeResponse(
        transcript=transcript,
        saved_transcription=TranscriptionOut.model_validate(saved),
    )
