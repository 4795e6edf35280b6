"""Telegram sending helpers with retry support."""

from __future__ import annotations

from typing import Any

from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter
from aiogram.types import Message

from neareat.logging import logger
from neareat.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3
RETRYABLE_TELEGRAM_ERRORS = (TelegramNetworkError, TelegramRetryAfter)


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Send a reply, retrying transient Telegram failures."""

    async def _send():
        return await message.answer(text, **kwargs)

    return await retry_async(
        _send,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        retry_on=RETRYABLE_TELEGRAM_ERRORS,
        logger=logger,
        operation_name="telegram_answer",
    )


__all__ = ["answer_with_retry"]
