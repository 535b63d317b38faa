from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Cosmos API"
    debug: bool = False

    # Paths
    db_path: Path = PROJECT_ROOT / "cosmos.db"

    # LLM
    llm_provider: str = "openai"  # openai | gemini
    openai_api_key: str = ""
    gemini_api_key: str = ""
    llm_model: str = ""  # empty = provider default

    # Chat
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500
    response_language: str = "Brazilian Portuguese"
    default_conversation_title: str = "Nova Conversa"

    # Memory
    summary_temperature: float = 0.3
    memory_window: int = Field(10, gt=0)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(PROJECT_ROOT / ".env"),
        "env_prefix": "COSMOS_",
    }


settings = Settings()
