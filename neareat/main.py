"""Application entrypoint."""

from __future__ import annotations

import asyncio

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from neareat.bot.middlewares import SearchSessionMiddleware, ThrottleMiddleware
from neareat.bot.routers import setup_routers
from neareat.config import get_settings
from neareat.logging import configure_logging, logger
from neareat.services.sessions import SearchSessionRegistry


async def main() -> None:
    configure_logging()
    settings = get_settings()
    if settings.kakao.api_key is None:
        logger.warning("kakao_api_key_missing")

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())

    async with httpx.AsyncClient() as http_client:
        registry = SearchSessionRegistry(
            http_client,
            settings=settings.kakao,
            max_sessions=settings.max_search_sessions,
        )
        session_middleware = SearchSessionMiddleware(registry)
        throttle_middleware = ThrottleMiddleware(settings)

        dp.message.middleware(throttle_middleware)
        dp.message.middleware(session_middleware)
        dp.edited_message.middleware(session_middleware)

        logger.info("bot_starting", environment=settings.environment)
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


if __name__ == "__main__":
    asyncio.run(main())
