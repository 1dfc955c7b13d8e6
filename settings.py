"""settings.py — Source URLs, timeout and extra filter phrases from .env / environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from fetcher import DEFAULT_LITURGY_URL, DEFAULT_SAINT_URL, DEFAULT_TIMEOUT

ENV_FILE = Path(".env")


@dataclass(frozen=True)
class Settings:
    saint_url: str = DEFAULT_SAINT_URL
    liturgy_url: str = DEFAULT_LITURGY_URL
    timeout: float = DEFAULT_TIMEOUT
    skip_phrases: tuple[str, ...] = ()


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def load_settings(env_file: Path | None = None) -> Settings:
    """Read LEITOR_* variables. Missing or invalid values keep their defaults."""
    load_dotenv(env_file or ENV_FILE)
    saint_url = os.getenv("LEITOR_SANTO_URL", "").strip()
    liturgy_url = os.getenv("LEITOR_LITURGIA_URL", "").strip()
    timeout = os.getenv("LEITOR_TIMEOUT", "").strip()
    phrases = os.getenv("LEITOR_SKIP_PHRASES", "")

    return Settings(
        saint_url=saint_url or DEFAULT_SAINT_URL,
        liturgy_url=liturgy_url or DEFAULT_LITURGY_URL,
        timeout=_parse_timeout(timeout) if timeout else DEFAULT_TIMEOUT,
        skip_phrases=tuple(p.strip() for p in phrases.split("|") if p.strip()),
    )
