"""Timer jobs: data refresh, page rotation, debounced resize.

All three run on the PTB JobQueue inside the bot's single event loop and
share the BoardState kept in bot_data["state"].
"""

from __future__ import annotations

import logging

from telegram.error import BadRequest, TelegramError
from telegram.ext import ContextTypes, JobQueue

from flapboard.services.formatter import format_board
from flapboard.services.pagination import rotate
from flapboard.services.time_window import local_now
from flapboard.services.viewport import resize

logger = logging.getLogger(__name__)

RESIZE_JOB = "resize"


async def publish_board(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Draw the current pages: edit the board message, or send a new one."""
    state = context.bot_data.get("state")
    chat_id = context.bot_data.get("chat_id")
    if state is None or chat_id is None:
        logger.error("Publish: state or chat_id missing from bot_data")
        return

    text = format_board(state, local_now(context.bot_data["timezone"]))

    if state.board_message_id is not None:
        try:
            await context.bot.edit_message_text(
                text, chat_id=chat_id, message_id=state.board_message_id, parse_mode="HTML",
            )
            return
        except BadRequest as exc:
            if "not modified" in str(exc).lower():
                return
            logger.warning("Board message %s lost (%s), sending a new one",
                           state.board_message_id, exc)
            state.board_message_id = None

    message = await context.bot.send_message(chat_id=chat_id, text=text, parse_mode="HTML")
    state.board_message_id = message.message_id


async def refresh_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Slow timer: rebuild the flight data, then redraw from page 0."""
    pipeline = context.bot_data.get("pipeline")
    state = context.bot_data.get("state")
    if pipeline is None or state is None:
        logger.error("Refresh: pipeline or state missing from bot_data")
        return
    if not await pipeline.refresh(state):
        return
    try:
        await publish_board(context)
    except TelegramError:
        logger.exception("Board publish after refresh failed")


async def rotation_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Fast timer: advance each direction's page on its own."""
    state = context.bot_data.get("state")
    if state is None:
        return
    rotate(state)
    try:
        await publish_board(context)
    except TelegramError:
        logger.exception("Board publish after rotation failed")


def schedule_resize(job_queue: JobQueue, width: int, height: int, delay: float) -> None:
    """Debounce: every new size restarts the settle timer."""
    for job in job_queue.get_jobs_by_name(RESIZE_JOB):
        job.schedule_removal()
    job_queue.run_once(resize_job, when=delay, data=(width, height), name=RESIZE_JOB)


async def resize_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    state = context.bot_data.get("state")
    if state is None:
        return
    width, height = context.job.data
    old_message_id = state.board_message_id
    if not resize(state, width, height):
        return

    # The old board was drawn for another page size: clear it and draw afresh
    chat_id = context.bot_data.get("chat_id")
    try:
        if old_message_id is not None and chat_id is not None:
            await context.bot.delete_message(chat_id=chat_id, message_id=old_message_id)
    except TelegramError as exc:
        logger.warning("Could not delete old board %s: %s", old_message_id, exc)
    try:
        await publish_board(context)
    except TelegramError:
        logger.exception("Board publish after resize failed")
