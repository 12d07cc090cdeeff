"""
Application settings and configuration.
"""
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, ConfigDict
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ========== App Settings ==========
    APP_NAME: str = "Code Debug Helper"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Find, explain and fix mistakes in student code"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 7860
    SHARE: bool = False
    LOG_LEVEL: str = "INFO"

    # ========== LLM Configuration ==========
    LLM_PROVIDER: str = "gemini"
    MODEL_NAME: str | None = None
    TEMPERATURE: float = 0.0
    LLM_REQUEST_TIMEOUT: float = 60.0
    # No automatic retries
    LLM_MAX_RETRIES: int = 0

    # Gemini LLM Configuration
    GEMINI_API_KEY: str | None = Field(
        None, validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )

    # OpenAI LLM Configuration
    OPENAI_API_KEY: str | None = Field(None, validation_alias="OPENAI_API_KEY")

    model_config = ConfigDict(
            env_file=".env",
            env_file_encoding="utf-8",
            case_sensitive=False,
            extra="ignore",
        )
# Create settings instance
settings = Settings()
