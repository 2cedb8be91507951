from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import ContextTypes

from flapboard.handlers.scheduler import publish_board, schedule_resize
from flapboard.services.formatter import format_status
from flapboard.services.time_window import local_now

logger = logging.getLogger(__name__)


async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "🛫 <b>Flapboard</b>\n\n"
        "Live split-flap board for Incheon International Airport:\n"
        "  ✈️ Arrivals — 4h either side of now\n"
        "  🛫 Departures — from 1h ago to 6h ahead\n\n"
        "The board refreshes and turns its pages on its own.\n"
        "/help lists the operator commands.",
        parse_mode="HTML",
    )


async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "🛫 <b>Flapboard Commands</b>\n\n"
        "/board — draw the board again at the bottom of the chat\n"
        "/refresh — fetch flight data now\n"
        "/resize W H — display is now W×H pixels\n"
        "/status — data and paging health check",
        parse_mode="HTML",
    )


async def cmd_board(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    state = context.bot_data.get("state")
    if state is None:
        await update.message.reply_text("⚠️ Board not ready yet.")
        return
    state.board_message_id = None
    await publish_board(context)


async def cmd_refresh(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    pipeline = context.bot_data.get("pipeline")
    state = context.bot_data.get("state")
    if pipeline is None or state is None:
        await update.message.reply_text("⚠️ Board not ready yet.")
        return
    await update.message.reply_text("⏳ Fetching live data…")
    if await pipeline.refresh(state):
        await publish_board(context)
        await update.message.reply_text("✅ Board refreshed.")
    else:
        await update.message.reply_text("⚠️ Refresh skipped or failed, previous data kept.")


async def cmd_resize(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    try:
        width, height = (int(a) for a in context.args or [])
    except ValueError:
        await update.message.reply_text("Usage: /resize WIDTH HEIGHT  (e.g. /resize 1920 1080)")
        return
    if width <= 0 or height <= 0:
        await update.message.reply_text("⚠️ Width and height must be positive.")
        return
    delay = context.bot_data["resize_debounce"]
    schedule_resize(context.job_queue, width, height, delay)
    logger.info("Resize to %dx%d requested", width, height)


async def cmd_status(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    state = context.bot_data.get("state")
    if state is None:
        await update.message.reply_text("⚠️ Board not ready yet.")
        return
    now = local_now(context.bot_data["timezone"])
    await update.message.reply_text(format_status(state, now), parse_mode="HTML")
