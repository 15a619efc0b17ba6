# -*- coding: utf-8 -*-
"""Environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the healthtrack backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        # ---- Storage ----
        self.data_root: Path = Path(
            os.environ.get("HEALTHTRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        self.default_user_id: str = (
            os.environ.get("HEALTHTRACK_DEFAULT_USER") or "default_user"
        ).strip() or "default_user"

        # ---- Gemini ----
        self.gemini_api_key: str | None = os.environ.get("GEMINI_API_KEY")
        self.gemini_base_url: str = os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_model: str = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
        self.gemini_timeout: float = float(os.environ.get("GEMINI_TIMEOUT", "30"))

        # ---- Nutritionix ----
        self.nutritionix_app_id: str = os.environ.get("NUTRITIONIX_APP_ID") or ""
        self.nutritionix_app_key: str = os.environ.get("NUTRITIONIX_APP_KEY") or ""
        self.nutritionix_base_url: str = os.environ.get(
            "NUTRITIONIX_BASE_URL", "https://trackapi.nutritionix.com/v2"
        )
        self.nutritionix_timeout: float = float(os.environ.get("NUTRITIONIX_TIMEOUT", "15"))

        # ---- Server ----
        self.host: str = os.environ.get("HEALTHTRACK_HOST") or "127.0.0.1"
        try:
            self.port: int = int(os.environ.get("HEALTHTRACK_PORT") or "8000")
        except ValueError:
            self.port = 8000

        cors = os.environ.get("HEALTHTRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
