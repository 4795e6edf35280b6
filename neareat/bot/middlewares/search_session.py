"""Attach the chat's search session to handler data."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from neareat.services.sessions import SearchSessionRegistry


class SearchSessionMiddleware(BaseMiddleware):
    def __init__(self, registry: SearchSessionRegistry) -> None:
        self.registry = registry

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if isinstance(event, Message) and event.chat is not None:
            data["search"] = self.registry.get(event.chat.id)
        return await handler(event, data)


__all__ = ["SearchSessionMiddleware"]
