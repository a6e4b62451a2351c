from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "state"


def _data_dir_from_env() -> Path:
    return Path(os.getenv("CAMPUSSPOT_DATA_DIR", "") or _DEFAULT_DATA_DIR)


@dataclass(frozen=True)
class StoreConfig:
    data_dir: Path = field(default_factory=_data_dir_from_env)
    favorites_key: str = "favorites"
    visited_key: str = "visited"
    custom_places_key: str = "custom_places"
    placeholder_image: str = "https://picsum.photos/800/600?random={n}"


DEFAULT_STORE_CONFIG = StoreConfig()
