from typing import Any, Dict, List, Optional
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # API
    PROJECT_NAME: str = "audioscribe"
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 5500

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str
    CREATE_TABLES_ON_STARTUP: bool = False

    @field_validator("DATABASE_URL")
    def use_async_driver(cls, v: str) -> str:
        for prefix in ("postgresql://", "postgres://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    # Deepgram
    DEEPGRAM_API_KEY: str
    DEEPGRAM_API_URL: str = "https://api.deepgram.com/v1"
    DEEPGRAM_MODEL: str = "nova-3"

    # Supabase storage
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_BUCKET: str

    @field_validator("SUPABASE_URL", "DEEPGRAM_API_URL")
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Outbound HTTP
    HTTP_TIMEOUT: float = 60.0

    # File uploads
    MAX_UPLOAD_SIZE: int = 100 * 1024 * 1024  # 100 MB

    # Logging
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # API docs
    DOCS_URL: Optional[str] = "/docs"
    REDOC_URL: Optional[str] = "/redoc"
    OPENAPI_URL: Optional[str] = "/openapi.json"

    @field_validator("OPENAPI_URL", "DOCS_URL", "REDOC_URL")
    def disable_docs_in_production(cls, v: Optional[str], info: Any) -> Optional[str]:
        if info.data.get("ENVIRONMENT") == "production" and v is not None:
            # Disable API docs in production unless explicitly enabled
            return None
        return v

    @property
    def storage_public_base(self) -> str:
        """Base URL under which objects of the bucket are publicly served"""
        return f"{self.SUPABASE_URL}/storage/v1/object/public/{self.SUPABASE_BUCKET}"

    def safe_summary(self) -> Dict[str, Any]:
        """Settings worth logging at startup, without secrets"""
        return {
            "environment": self.ENVIRONMENT,
            "port": self.PORT,
            "deepgram_model": self.DEEPGRAM_MODEL,
            "bucket": self.SUPABASE_BUCKET,
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
