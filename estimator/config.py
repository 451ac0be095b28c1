from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Project Estimator"
    DATABASE_URL: str = "sqlite:///./estimates.db"
    LOG_LEVEL: str = "INFO"

    # Saved estimate history
    HISTORY_LIMIT: int = 50

    # Document intake
    MAX_UPLOAD_MB: float = 20.0

    # AI suggestions (Gemini). Empty key disables the AI endpoints.
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_TIMEOUT_SECONDS: int = 60
    # Pause between consecutive AI calls in a batch
    AI_REQUEST_DELAY_SECONDS: float = 1.0

    class Config:
        env_file = ".env"


settings = Settings()
