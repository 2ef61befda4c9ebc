from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "code-explainer-api"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    GITHUB_TOKEN: str | None = None
    GITHUB_TIMEOUT_SECONDS: float = 30.0

    LLM_PROVIDER: str = "gemini"  # gemini | ollama
    GEMINI_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"),
    )
    GEMINI_CHAT_MODEL: str = "gemini-2.0-flash"
    OLLAMA_MODEL: str = "qwen2.5-coder:7b-instruct"
    OLLAMA_BASE_URL: str | None = None

    LLM_TEMPERATURE: float = 0.3
    LLM_MAX_OUTPUT_TOKENS: int = 1000
    LLM_TIMEOUT_SECONDS: float = 30.0

settings = Settings()
