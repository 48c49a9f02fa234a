from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class PlacesConfig:
    api_key: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    base_url: str = "https://maps.googleapis.com/maps/api/place"
    timeout: float = 10.0
    default_radius_m: int = 5000
    cache_ttl: int = 300  # 5 minutes
    max_photos: int = 3
    enabled: bool = True

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_PLACES_CONFIG = PlacesConfig()
