"""SEARCHADS — Central Configuration via Pydantic Settings."""

import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Database ──
    database_url: str = ""
    index_database_url: str = ""  # Empty → share the ads database

    # ── Ingestion ──
    ads_data_path: str = "data/ads.json"
    budget_data_path: str = ""
    ingest_on_startup: bool = True

    # ── Query ──
    dedupe_results: bool = False  # Legacy behavior repeats ads matched by several keywords

    # ── App ──
    log_level: str = "INFO"

    @property
    def effective_database_url(self) -> str:
        """Return the configured URL if set, otherwise fall back to SQLite."""
        if self.database_url:
            return self.database_url
        # Vercel has a read-only filesystem; use /tmp for SQLite
        if os.environ.get("VERCEL"):
            return "sqlite:////tmp/searchads.db"
        return "sqlite:///./searchads.db"

    @property
    def effective_index_database_url(self) -> str:
        """Keyword index URL; defaults to the ads database."""
        return self.index_database_url or self.effective_database_url

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
