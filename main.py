#!/usr/bin/env python3
"""Flapboard — Entry point."""

from __future__ import annotations

import logging

from flapboard.bot import create_application
from flapboard.config import get_settings, setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger("flapboard")
    logger.info("Starting Flapboard…")

    app = create_application(settings)
    app.run_polling(drop_pending_updates=True)


if __name__ == "__main__":
    main()
