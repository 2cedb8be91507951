"""Telegram Application factory.

Loads the airport table, builds the shared BoardState and pipeline, wires the
operator commands and registers the refresh and rotation timers.
"""

from __future__ import annotations

import logging

from telegram.ext import Application, CommandHandler

from flapboard.config import Settings
from flapboard.handlers.commands import (
    cmd_board,
    cmd_help,
    cmd_refresh,
    cmd_resize,
    cmd_start,
    cmd_status,
)
from flapboard.handlers.scheduler import refresh_job, rotation_job
from flapboard.models import BoardState
from flapboard.services.flights import FlightApiClient
from flapboard.services.orchestrator import FlightBoardPipeline
from flapboard.services.translator import load_airport_table
from flapboard.services.viewport import compute_rows_per_page
from flapboard.utils.cache import configure_cache
from flapboard.utils.http import close_session

logger = logging.getLogger(__name__)


async def _on_shutdown(app: Application) -> None:  # type: ignore[type-arg]
    await close_session()
    logger.info("HTTP session closed.")


def build_state(settings: Settings) -> BoardState:
    viewport = (settings.display_width, settings.display_height)
    rows = compute_rows_per_page(*viewport)
    logger.info("Screen: %dx%d, rows per page: %d", *viewport, rows)
    return BoardState(rows_per_page=rows, viewport=viewport)


def create_application(settings: Settings) -> Application:  # type: ignore[type-arg]
    configure_cache(settings.cache_ttl_seconds)

    # Loaded before any refresh job exists, so no cycle sees a partial table
    airports = load_airport_table(settings.airports_file)
    client = FlightApiClient(proxy_url=settings.proxy_url, api_key=settings.airport_api_key)
    logger.info("Flight data via %s", "data.go.kr (direct)" if client.direct else settings.proxy_url)

    app = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_shutdown(_on_shutdown)
        .build()
    )

    app.bot_data["state"] = build_state(settings)
    app.bot_data["pipeline"] = FlightBoardPipeline(
        client, airports, timezone=settings.timezone, fallback_cap=settings.fallback_cap,
    )
    app.bot_data["chat_id"] = settings.telegram_chat_id
    app.bot_data["timezone"] = settings.timezone
    app.bot_data["resize_debounce"] = settings.resize_debounce_seconds

    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("board", cmd_board))
    app.add_handler(CommandHandler("refresh", cmd_refresh))
    app.add_handler(CommandHandler("resize", cmd_resize))
    app.add_handler(CommandHandler("status", cmd_status))

    app.job_queue.run_repeating(
        refresh_job,
        interval=settings.refresh_interval_seconds,
        first=1,
        name="refresh",
    )
    app.job_queue.run_repeating(
        rotation_job,
        interval=settings.rotation_interval_seconds,
        first=settings.rotation_interval_seconds,
        name="rotation",
    )
    logger.info(
        "Refresh every %ds, rotation every %ds",
        settings.refresh_interval_seconds, settings.rotation_interval_seconds,
    )

    logger.info("Board ready (chat_id=%s).", settings.telegram_chat_id)
    return app
