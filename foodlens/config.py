from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the FoodLens service and client."""

    def __init__(self) -> None:
        data_root_default = Path.home() / ".foodlens"

        self.gemini_model: str = os.environ.get("FOODLENS_GEMINI_MODEL", "gemini-2.0-flash-exp")
        self.gemini_base_url: str = os.environ.get(
            "FOODLENS_GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_timeout: float = float(os.environ.get("FOODLENS_GEMINI_TIMEOUT") or "30")

        self.host: str = os.environ.get("FOODLENS_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("FOODLENS_PORT") or "8000")
        self.log_level: str = (os.environ.get("FOODLENS_LOG_LEVEL") or "INFO").upper()

        # ---- Client (CLI) ----
        self.data_root: Path = Path(
            os.environ.get("FOODLENS_DATA_ROOT") or data_root_default
        ).expanduser()
        self.server_url: str = os.environ.get("FOODLENS_SERVER_URL") or f"http://{self.host}:{self.port}"

        cors = os.environ.get("FOODLENS_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
