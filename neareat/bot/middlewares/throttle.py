"""Simple per-user throttle to prevent rapid-fire searches."""

from __future__ import annotations

import time
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from neareat.config import NearEatSettings, get_settings
from neareat.i18n import I18nService


class ThrottleMiddleware(BaseMiddleware):
    def __init__(self, settings: NearEatSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self.window_seconds = self.settings.request_limit.interval_seconds
        self.max_requests = self.settings.request_limit.max_requests
        self.i18n = I18nService(default_locale=self.settings.default_language)
        self._events: Dict[int, Deque[float]] = defaultdict(deque)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_id = self._extract_user_id(event)
        if user_id is None or self.max_requests <= 0:
            return await handler(event, data)

        # Location pushes are not searches; never drop them.
        if getattr(event, "location", None) is not None:
            return await handler(event, data)

        now = time.monotonic()
        bucket = self._events[user_id]

        while bucket and now - bucket[0] > self.window_seconds:
            bucket.popleft()

        if len(bucket) >= self.max_requests:
            await self._notify_limit(event)
            return None

        bucket.append(now)
        return await handler(event, data)

    @staticmethod
    def _extract_user_id(event: TelegramObject) -> int | None:
        if isinstance(event, Message) and event.from_user is not None:
            return event.from_user.id
        return None

    async def _notify_limit(self, event: TelegramObject) -> None:
        if not isinstance(event, Message):
            return
        locale = getattr(event.from_user, "language_code", None)
        await event.answer(self.i18n.gettext("throttle.limited", locale=locale), parse_mode=None)


__all__ = ["ThrottleMiddleware"]
