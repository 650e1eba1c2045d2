# pokedex/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


DEFAULT_API_URL = "https://nestjs-pokedex-api.vercel.app"
PAGE_SIZE_OPTIONS: Tuple[int, ...] = (20, 50, 100)
DEFAULT_PAGE_SIZE = 50
LOG_LEVELS: Tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class PokedexSettings:
    """Runtime settings for the catalog service.

    Notes
    - api_url is the origin of the remote Pokédex API, without a trailing slash.
    - page_size must be one of ``page_size_options``; it seeds the filter state.
    - The remote API is awaited without timeout, so none is configurable here.
    - log_level is one of ``LOG_LEVELS`` (upper case).
    """

    api_url: str = DEFAULT_API_URL
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.page_size not in self.page_size_options:
            raise ValueError(
                f"page size {self.page_size} is not one of {list(self.page_size_options)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log level {self.log_level!r} is not one of {list(LOG_LEVELS)}"
            )

    @staticmethod
    def normalize_api_url(api_url: str) -> str:
        url = (api_url or "").strip()
        if not url:
            return DEFAULT_API_URL
        return url.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PokedexSettings":
        env = os.environ if environ is None else environ
        raw_size = (env.get("POKEDEX_PAGE_SIZE") or "").strip()
        try:
            page_size = int(raw_size) if raw_size else DEFAULT_PAGE_SIZE
        except ValueError:
            raise ValueError(f"POKEDEX_PAGE_SIZE must be an integer, got {raw_size!r}") from None
        return cls(
            api_url=cls.normalize_api_url(env.get("POKEDEX_API_URL", "")),
            page_size=page_size,
            log_level=(env.get("POKEDEX_LOG_LEVEL") or "INFO").strip().upper(),
        )
