from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    # App Settings
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Simple Explain"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Third Party Services
    OPENAI_API_KEY: str = ""  # Empty means the generation endpoints answer 500

    # LLM Settings
    LLM_MODEL: str = "openai/gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    LESSON_MAX_TOKENS: int = 3000
    ESSAY_MAX_TOKENS: int = 1500
    LLM_TIMEOUT_SECONDS: float = 60.0
    LLM_MAX_ATTEMPTS: int = 1  # No retries unless configured

    @property
    def llm_configured(self) -> bool:
        """Whether an upstream credential is available."""
        return bool(self.OPENAI_API_KEY.strip())

    @classmethod
    def load_from_env_file(cls):
        """Load settings from .env file in local development."""
        from pathlib import Path

        from dotenv import load_dotenv

        # Always load .env file if it exists
        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file, override=True)

        return cls()


settings = Settings.load_from_env_file()
