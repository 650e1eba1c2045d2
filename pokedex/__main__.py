"""Run the catalogue server (FastAPI + Uvicorn).

Usage:
  python -m pokedex --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from .config import LOG_LEVELS, PokedexSettings
from .main import create_app


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Pokédex catalogue (FastAPI) server.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", type=str.lower, default=None,
                        choices=[level.lower() for level in LOG_LEVELS],
                        help="default: POKEDEX_LOG_LEVEL or info")
    args = parser.parse_args(argv)

    try:
        settings = PokedexSettings.from_env()
    except ValueError as e:
        parser.error(str(e))
    log_level = args.log_level or settings.log_level.lower()

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=log_level)


if __name__ == "__main__":
    main()
