from audioscribe.models.models import Transcription, User

__all__ = ["Transcription", "User"]
