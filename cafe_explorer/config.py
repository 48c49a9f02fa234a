from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class AppConfig:
    """
    Configuration for the café explorer HTTP service.
    """

    title: str = "Café Explorer API"
    version: str = "1.0.0"
    data_dir: Path = Path(
        os.getenv("CAFE_DATA_DIR", str(Path(__file__).resolve().parent / "data"))
    )
    # IANA zone used for open-now checks; empty means server local time.
    timezone: str = os.getenv("CAFE_TIMEZONE", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )

    @property
    def cafes_path(self) -> Path:
        return self.data_dir / "cafes.json"

    @property
    def reviews_path(self) -> Path:
        return self.data_dir / "reviews.json"


DEFAULT_APP_CONFIG = AppConfig()
