"""Per-chat search sessions sharing one HTTP client."""

from __future__ import annotations

import asyncio
from collections import OrderedDict

import httpx

from neareat.config import KakaoLocalSettings
from neareat.logging import logger
from neareat.services.location import LocationProvider
from neareat.services.search import RestaurantSearch
from neareat.services.state import SearchState, SearchStateHolder

DEFAULT_MAX_SESSIONS = 10_000


class SearchSessionRegistry:
    """Hands out one search session per chat, evicting the least recently used.

    An evicted chat starts over with empty results and no known location.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: KakaoLocalSettings | None = None,
        *,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._client = http_client
        self._settings = settings or KakaoLocalSettings()
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[int, RestaurantSearch] = OrderedDict()

    def get(self, chat_id: int) -> RestaurantSearch:
        session = self._sessions.get(chat_id)
        if session is not None:
            self._sessions.move_to_end(chat_id)
            return session

        session = self._create(chat_id)
        self._sessions[chat_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("search_session_evicted", chat_id=evicted_id)
        return session

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _create(self, chat_id: int) -> RestaurantSearch:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        state = SearchStateHolder()
        state.subscribe(_transition_logger(chat_id))
        session = RestaurantSearch(
            self._client,
            self._settings,
            state=state,
            location=LocationProvider(label=chat_id, loop=loop),
        )
        logger.info("search_session_created", chat_id=chat_id)
        return session


def _transition_logger(chat_id: int):
    def _log(state: SearchState) -> None:
        logger.debug(
            "search_state_changed",
            chat_id=chat_id,
            status=state.status.value,
            result_count=len(state.results),
            error=state.error_message,
        )

    return _log


__all__ = ["SearchSessionRegistry"]
