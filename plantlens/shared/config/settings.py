# 📄 File: plantlens/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and tells the app where to keep plant records and which identification service to use.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for storage backend selection, AI gateway,
# image processing and logging parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - plantlens.main (application startup)
# - plantlens.modules.plant_records.infrastructure.storage.factory (backend selection)
# - plantlens.shared.utils.logging (log level / format)
# - External API clients (OpenAI, Nominatim)

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="PlantLens API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Photo-based plant identification with a personal plant library",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json/text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=5000, description="Server port")
    RELOAD: bool = Field(default=False, description="Auto-reload on changes")
    API_PREFIX: str = Field(default="/api", description="Prefix for plant endpoints")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # RECORD STORE
    # =========================================================================

    STORAGE_BACKEND: str = Field(
        default="filesystem",
        description="Plant record store backend (memory/filesystem/object)"
    )
    DATA_DIR: str = Field(default="data", description="Root directory of the filesystem store")

    # Supabase Storage (object backend)
    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, description="Supabase service role key")
    SUPABASE_STORAGE_BUCKET: str = Field(
        default="plant-records",
        description="Supabase storage bucket holding plant records and photos"
    )
    SUPABASE_STORAGE_TIMEOUT: int = Field(default=30, description="Storage client timeout (seconds)")

    # =========================================================================
    # PLANT IDENTIFICATION
    # =========================================================================

    IDENTIFIER_BACKEND: str = Field(
        default="openai",
        description="Identification gateway (openai/mock)"
    )
    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API key")
    OPENAI_API_URL: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL"
    )
    OPENAI_MODEL: str = Field(default="gpt-4o", description="Vision-capable OpenAI model")
    OPENAI_MAX_TOKENS: int = Field(default=500, description="OpenAI max tokens")
    OPENAI_TIMEOUT: int = Field(default=60, description="OpenAI request timeout (seconds)")

    # Reverse geocoding (OpenStreetMap Nominatim)
    REVERSE_GEOCODING_ENABLED: bool = Field(
        default=True,
        description="Resolve a place name when only coordinates are supplied"
    )
    NOMINATIM_API_URL: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Nominatim API base URL"
    )
    GEOCODING_TIMEOUT: int = Field(default=10, description="Reverse geocoding timeout (seconds)")

    # =========================================================================
    # IMAGE PROCESSING
    # =========================================================================

    MAX_IMAGE_SIZE: int = Field(default=10485760, description="Max decoded image size (10MB)")
    IMAGE_MAX_DIMENSION: int = Field(default=2048, description="Longest stored image edge in pixels")
    IMAGE_QUALITY: int = Field(default=85, description="JPEG compression quality")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed_formats = ["json", "text"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Log format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate record store backend name."""
        allowed_backends = ["memory", "filesystem", "object"]
        if v.lower() not in allowed_backends:
            raise ValueError(f"Storage backend must be one of {allowed_backends}")
        return v.lower()

    @field_validator("IDENTIFIER_BACKEND")
    @classmethod
    def validate_identifier_backend(cls, v: str) -> str:
        allowed_backends = ["openai", "mock"]
        if v.lower() not in allowed_backends:
            raise ValueError(f"Identifier backend must be one of {allowed_backends}")
        return v.lower()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("IMAGE_QUALITY")
    @classmethod
    def validate_image_quality(cls, v: int) -> int:
        if not 1 <= v <= 95:
            raise ValueError("Image quality must be between 1 and 95")
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def use_mock_identifier(self) -> bool:
        """Fall back to the canned identifier when OpenAI is not configured."""
        return self.IDENTIFIER_BACKEND == "mock" or not self.OPENAI_API_KEY

    def get_ai_api_config(self) -> dict:
        """Get AI/LLM API configuration."""
        return {
            "api_key": self.OPENAI_API_KEY,
            "api_url": self.OPENAI_API_URL,
            "model": self.OPENAI_MODEL,
            "max_tokens": self.OPENAI_MAX_TOKENS,
            "timeout": self.OPENAI_TIMEOUT,
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
