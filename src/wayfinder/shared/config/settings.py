from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import logging


class Settings(BaseSettings):
    # General
    LOG_LEVEL: str = Field(default="INFO", description="Application log level")
    BIND: str = Field(default="0.0.0.0:8077", description="API bind address")

    # CORS
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow credentials in CORS")
    CORS_ALLOW_METHODS: str = Field(default="*", description="Allowed CORS methods")
    CORS_ALLOW_HEADERS: str = Field(default="*", description="Allowed CORS headers")

    # LLM
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI base URL")
    CHAT_MODEL: str = Field(default="gpt-4o-mini", description="Chat model ID")
    MAX_TOKENS: int = Field(default=4096, description="Maximum token count")
    TEMPERATURE: float = Field(default=0.4, description="Temperature")
    LLM_MAX_CONCURRENCY: int = Field(default=10, description="Maximum concurrency for LLM requests")
    LLM_REQUEST_TIMEOUT: int = Field(default=90, description="LLM HTTP timeout (seconds)")
    MAX_TOOL_ROUNDS: int = Field(default=6, description="Maximum tool-call round trips per generation")

    # Places
    GOOGLE_PLACES_API_KEY: str = Field(
        default="",
        description="Google Places API key",
        validation_alias=AliasChoices("GOOGLE_PLACES_API_KEY", "GEMINI_API_KEY"),
    )
    PLACES_TEXT_SEARCH_URL: str = Field(default="https://maps.googleapis.com/maps/api/place/textsearch/json")
    PLACES_FIND_PLACE_URL: str = Field(default="https://maps.googleapis.com/maps/api/place/findplacefromtext/json")
    PLACES_PHOTO_URL: str = Field(default="https://maps.googleapis.com/maps/api/place/photo")
    PLACES_MAX_RESULTS: int = Field(default=5, description="Maximum places returned per text search")
    PLACES_PHOTO_MAX_WIDTH: int = Field(default=600, description="Max width (px) of place photo URLs")
    PLACES_REQUEST_TIMEOUT: int = Field(default=20, description="Places HTTP timeout (seconds)")

    # Planner
    DEFAULT_CURRENCY: str = Field(default="USD", description="Currency used when the caller sets none")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


def init_logging() -> None:
    lvl = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=lvl, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    # Reduce verbosity of noisy loggers
    for noisy in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
