from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARCHAEO_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Storage (NAS mount or local directory)
    data_root: Path = Path("nas_data")
    data_file_name: str = "db.json"
    uploads_dir_name: str = "uploads"
    vocabulary_file_name: str = "vocabulary.json"

    max_upload_bytes: int = 50 * 1024 * 1024
    stats_top_n: int = 8  # Remaining labels are folded into a single bucket

    @property
    def data_file(self) -> Path:
        return self.data_root / self.data_file_name

    @property
    def uploads_dir(self) -> Path:
        return self.data_root / self.uploads_dir_name

    @property
    def vocabulary_file(self) -> Path:
        return self.data_root / self.vocabulary_file_name


settings = Settings()
