from __future__ import annotations

import json
from pathlib import Path

from pydantic_settings import BaseSettings

from sejm_seats.schemas.allocation import ElectionConfig

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_ELECTION_CONFIG = DATA_DIR / "sejm2023.json"


class Settings(BaseSettings):
    # Vote data source
    DATA_SOURCE: str = "http"  # "http" | "directory"
    DATA_DIR: str = "./data"
    SOURCE_BASE_URL: str = "http://localhost:8000/sejm2023"
    ROSTER_PATH: str = "roster.json"
    REGION_PATH_TEMPLATE: str = "regions/{region}.json"

    # Fetch settings
    REQUEST_TIMEOUT: float = 30.0
    MAX_RETRIES: int = 3
    RETRY_BACKOFF: float = 1.0
    PARALLEL_REGIONS: int = 5

    # Election table (seats per region + aliases); empty = bundled Sejm 2023
    ELECTION_CONFIG: str = ""

    # Output
    PRINT_NAMES: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    model_config = {
        "env_file": [".env", "../.env"],
        "env_file_encoding": "utf-8",
    }


settings = Settings()


def load_election_config(path: str | Path | None = None) -> ElectionConfig:
    """Read seats-per-region and the alias table from a JSON file.

    Falls back to the bundled Sejm 2023 table when ``path`` is empty.
    """
    config_path = Path(path) if path else DEFAULT_ELECTION_CONFIG
    with open(config_path, "r", encoding="utf-8") as f:
        return ElectionConfig.model_validate(json.load(f))
