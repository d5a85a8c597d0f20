import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from dotenv import load_dotenv


load_dotenv()  # Load environment variables from a .env file if present

class Config(BaseSettings):
    """
    Application configuration settings.
    Reads from environment variables by default.
    """
    PROJECT_NAME: str = "News Verdict Backend"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"

    # AI gateway (OpenAI-compatible chat completions)
    LOVABLE_API_KEY: Optional[str] = os.getenv("LOVABLE_API_KEY")
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "google/gemini-3-flash-preview")

    # Performance Settings
    API_TIMEOUT: int = 60  # seconds

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    CORS_ALLOW_HEADERS: List[str] = [
        "authorization",
        "x-client-info",
        "apikey",
        "content-type",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


config = Config()
