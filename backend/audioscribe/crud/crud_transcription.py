from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from audioscribe.crud.base import CRUDBase, parse_uuid
from audioscribe.models.models import Transcription


class CRUDTranscription(CRUDBase[Transcription]):
    """Store operations for the transcription model"""

    async def create(
        self, db: AsyncSession, *, user_id: Any, transcript: str, file_url: str
    ) -> Transcription:
        """Persist a transcription for a user"""
        db_obj = Transcription(
            user_id=parse_uuid(user_id),
            transcript=transcript,
            file_url=file_url,
        )
        return await self.add(db, db_obj)

    async def list_by_user(self, db: AsyncSession, user_id: Any) -> List[Transcription]:
        """List all transcriptions of a user, oldest first"""
        user_id = parse_uuid(user_id)
        return await self.get_by_condition(db, condition=Transcription.user_id == user_id)


transcription_crud = CRUDTranscription(Transcription)
