from fastapi import APIRouter

from audioscribe.api.routes import audio, auth, transcriptions

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(audio.router, tags=["audio"])
api_router.include_router(transcriptions.router, tags=["transcriptions"])
