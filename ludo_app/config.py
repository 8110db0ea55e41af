import os
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ludo_app.utils.util import load_yaml

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_SETTINGS_PATH = os.path.join(BASE_DIR, "..", "settings.yaml")


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    include_board: bool = True


def load_settings(path: Optional[str] = None) -> Settings:
    path = path or os.getenv("LUDO_SETTINGS", DEFAULT_SETTINGS_PATH)
    if not os.path.exists(path):
        logger.info(f"No settings file at {path}, using defaults")
        return Settings()

    return Settings(**load_yaml(path))


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
