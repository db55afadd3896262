from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from audioscribe.schemas.base import IdentifiedBase


class TranscriptionOut(IdentifiedBase):
    """Stored transcription record"""
    user_id: UUID
    transcript: str
    file_url: str


class TranscriptionSummary(BaseModel):
    """Transcription as listed for a user"""
    transcript: str
    file_url: str

    model_config = ConfigDict(from_attributes=True)


class TranscribeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Transcription successful!"
    transcript: str
    saved_transcription: TranscriptionOut = Field(..., alias="savedTranscription")


class TranscriptionListResponse(BaseModel):
    success: bool = True
    transcriptions: List[TranscriptionSummary]


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Audio uploaded successfully!"
    file_url: str = Field(..., alias="fileURL")
