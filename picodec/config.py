"""Centralized configuration for the π digit codec.

Defines immutable defaults for the digit table location, its expected size,
the encoder's lookahead window, and download behavior so that every entry
point (library calls, CLI commands, tests) agrees on the same values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Digit table storage
    DEFAULT_CACHE_DIR: Path = Path(".cache/picodec")
    DEFAULT_TABLE_PATH: Path = Path(".cache/picodec/pi-1000000.txt")
    DEFAULT_DIGIT_COUNT: int = 1_000_000
    DEFAULT_DIGIT_SOURCE: str = "angio"

    # Encoder search
    # Bytes hex-expanded per cursor position. Eight bytes is sixteen digits; a
    # given sixteen-digit string is vanishingly unlikely to occur in a million
    # digits, so longer windows only cost search time.
    MAX_LOOKAHEAD_BYTES: int = 8
    SEARCH_CACHE_SIZE: int = 4096

    # Downloads
    DOWNLOAD_TIMEOUT: float = 30.0
    DOWNLOAD_RETRIES: int = 3
    DOWNLOAD_CHUNK_SIZE: int = 1024 * 1024


# Known digit files. Each starts with "3." followed by the decimals.
DIGIT_SOURCES: dict[str, str] = {
    "angio": "https://www.angio.net/pi/digits/pi1000000.txt",
}

# SHA256 values are computed on first download and persisted in a sidecar
# file next to the download; fill them in here to pin a source.
DIGIT_SHA256: dict[str, str | None] = {
    "angio": None,
}


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
