from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./data/notes.db"
    run_migrations: bool = True
    # Seconds a writer waits for the SQLite write lock before failing
    sqlite_busy_timeout: float = 30.0

    attachments_dir: str = "data/attachments"
    max_attachment_bytes: int = 10 * 1024 * 1024

    # Seeded on first start when the folders table is empty
    default_folders: list[str] = ["Notes", "Work", "Personal"]

    log_level: str = "INFO"

    rate_limit_enabled: bool = True
    sync_rate_limit: str = "30/minute"
    upload_rate_limit: str = "20/minute"

    cors_origins: str = "http://localhost,http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
