from typing import Optional

from fastapi import Request, UploadFile

from audioscribe.core.config import Settings
from audioscribe.core.exceptions import FileUploadError
from audioscribe.services.storage_service import StorageService
from audioscribe.services.transcription_service import TranscriptionService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_transcription_service(request: Request) -> TranscriptionService:
    """Transcription client built once in the application lifespan"""
    return request.app.state.transcription_service


def get_storage_service(request: Request) -> StorageService:
    """Storage client built once in the application lifespan"""
    return request.app.state.storage_service


async def read_upload(file: Optional[UploadFile], max_size: int) -> bytes:
    """
    Read an uploaded audio file fully into memory

    Args:
        file: Multipart file, None if the field was absent
        max_size: Maximum accepted size in bytes

    Returns:
        File content

    Raises:
        FileUploadError: If no file was sent or it is too large
    """
    if file is None or not file.filename:
        raise FileUploadError("No file uploaded")

    if file.size is not None and file.size > max_size:
        raise FileUploadError("File too large")

    data = await file.read()
    if len(data) > max_size:
        raise FileUploadError("File too large")
    return data
