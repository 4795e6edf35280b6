"""Tests for the throttle and search-session middlewares."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest

from neareat.bot.middlewares import search_session as session_module
from neareat.bot.middlewares import throttle as throttle_module
from neareat.bot.middlewares.search_session import SearchSessionMiddleware
from neareat.bot.middlewares.throttle import ThrottleMiddleware
from neareat.services.search import RestaurantSearch
from neareat.services.sessions import SearchSessionRegistry


class DummyFromUser:
    def __init__(self, user_id: int = 1, language_code: str = "en") -> None:
        self.id = user_id
        self.language_code = language_code


class DummyMessage:
    def __init__(self, text: str = "chicken", *, chat_id: int = 10, location=None, from_user=None) -> None:
        self.text = text
        self.location = location
        self.from_user = from_user or DummyFromUser()
        self.chat = SimpleNamespace(id=chat_id, type="private")
        self.answers: list[tuple[str, str | None]] = []

    async def answer(self, text: str, parse_mode: str | None = None):
        self.answers.append((text, parse_mode))
        return text


@pytest.fixture(autouse=True)
def patch_aiogram_message(monkeypatch):
    monkeypatch.setattr(throttle_module, "Message", DummyMessage)
    monkeypatch.setattr(session_module, "Message", DummyMessage)


def _settings(max_requests: int = 1, interval_seconds: int = 60):
    return SimpleNamespace(
        default_language="en",
        request_limit=SimpleNamespace(max_requests=max_requests, interval_seconds=interval_seconds),
    )


@pytest.mark.asyncio
async def test_throttle_blocks_after_limit():
    middleware = ThrottleMiddleware(_settings(max_requests=1))
    handled: list[str] = []

    async def handler(event, data):
        handled.append(event.text)
        return "ok"

    first = DummyMessage("a")
    second = DummyMessage("b")
    assert await middleware(handler, first, {}) == "ok"
    assert await middleware(handler, second, {}) is None

    assert handled == ["a"]
    assert second.answers == [("Too many requests, please slow down.", None)]


@pytest.mark.asyncio
async def test_throttle_is_per_user():
    middleware = ThrottleMiddleware(_settings(max_requests=1))

    async def handler(event, data):
        return event.from_user.id

    assert await middleware(handler, DummyMessage(from_user=DummyFromUser(1)), {}) == 1
    assert await middleware(handler, DummyMessage(from_user=DummyFromUser(2)), {}) == 2


@pytest.mark.asyncio
async def test_throttle_never_drops_location_updates():
    middleware = ThrottleMiddleware(_settings(max_requests=1))
    handled: list[object] = []

    async def handler(event, data):
        handled.append(event)

    await middleware(handler, DummyMessage("a"), {})
    location_message = DummyMessage(None, location=SimpleNamespace(latitude=1.0, longitude=2.0))
    await middleware(handler, location_message, {})

    assert handled[-1] is location_message


@pytest.mark.asyncio
async def test_session_middleware_injects_per_chat_search():
    async with httpx.AsyncClient() as client:
        registry = SearchSessionRegistry(client)
        middleware = SearchSessionMiddleware(registry)
        seen: list[RestaurantSearch] = []

        async def handler(event, data):
            seen.append(data["search"])

        await middleware(handler, DummyMessage(chat_id=1), {})
        await middleware(handler, DummyMessage(chat_id=1), {})
        await middleware(handler, DummyMessage(chat_id=2), {})

    assert seen[0] is seen[1]
    assert seen[0] is not seen[2]
    assert len(registry) == 2
    assert 1 in registry and 3 not in registry
