"""
Lorekeep - main entry point.

Runs the API under uvicorn using API_HOST/PORT from settings:

    python -m lorekeep.main
"""

from __future__ import annotations

import logging

import uvicorn

from lorekeep.config import get_settings


def main():
    """Main entry point."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "lorekeep.api.app:app",
        host=settings.api_host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
