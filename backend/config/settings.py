from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API Settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Image Edit Studio"
    VERSION: str = "1.0.0"

    # Server Settings
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # External APIs - Gemini
    API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash-image"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT: Optional[float] = None  # None waits for the service indefinitely

    # Upload Limits
    MAX_UPLOAD_SIZE: int = 20 * 1024 * 1024  # 20MB

    # Editor sessions (in-memory only)
    SESSION_TTL_SECONDS: int = 3600
    SESSION_MAX_COUNT: int = 1000
    SESSION_COOKIE_NAME: str = "editor_session"

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8000"
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Validate required settings
        self._validate_required_settings()

    def _validate_required_settings(self):
        """Validate that all required settings are present."""
        required_fields = ["API_KEY"]
        missing_fields = []

        for field in required_fields:
            if not getattr(self, field, None):
                missing_fields.append(field)

        if missing_fields:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_fields)}\n"
                f"Please check your .env file or environment variables."
            )

# Global settings instance
settings = Settings()
