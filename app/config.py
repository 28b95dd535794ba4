from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_PATH: str = "blog.db"
    DATABASE_URL: str | None = None
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Static UI bundle served as a fallback route
    ASSETS_DIR: str = "/app/assets"

    # Pagination window
    DEFAULT_WINDOW_END: int = 100
    MAX_WINDOW: int = 100

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{self.DB_PATH}"


settings = Settings()
