from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the NutriTrack service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent

        self.data_root: Path = Path(
            os.environ.get("NUTRITRACK_DATA_ROOT") or (repo_root / "data")
        ).expanduser()
        self.log_level: str = (os.environ.get("NUTRITRACK_LOG_LEVEL") or "INFO").strip().upper()
        self.max_tips: int = int(os.environ.get("NUTRITRACK_MAX_TIPS") or "6")
        self.default_length_unit: str = os.environ.get("NUTRITRACK_DEFAULT_LENGTH_UNIT") or "cm"
        self.default_mass_unit: str = os.environ.get("NUTRITRACK_DEFAULT_MASS_UNIT") or "kg"
        self.host: str = os.environ.get("NUTRITRACK_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port_raw: str = os.environ.get("NUTRITRACK_PORT") or os.environ.get("PORT") or "8000"

        cors = os.environ.get("NUTRITRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
