"""Observable search state shared between the pipeline and presentation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable

from neareat.domain.models import Place
from neareat.logging import logger
from neareat.services.exceptions import SearchError


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class SearchState:
    query: str = ""
    results: tuple[Place, ...] = ()
    status: SearchStatus = SearchStatus.IDLE
    error: SearchError | None = None

    @property
    def is_loading(self) -> bool:
        return self.status is SearchStatus.LOADING

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error is not None else None


StateListener = Callable[[SearchState], None]


class SearchStateHolder:
    """Single-writer, multi-reader container for :class:`SearchState`.

    Each write replaces the whole snapshot, so readers never see a half-applied
    transition. Listeners run synchronously, in subscription order, after the
    swap.
    """

    def __init__(self, initial: SearchState | None = None) -> None:
        self._state = initial or SearchState()
        self._listeners: list[StateListener] = []

    @property
    def snapshot(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, query: str) -> SearchState:
        return self._swap(query=query)

    def begin(self, query: str) -> SearchState:
        return self._swap(query=query, status=SearchStatus.LOADING, error=None)

    def succeed(self, results: Iterable[Place]) -> SearchState:
        return self._swap(results=tuple(results), status=SearchStatus.SUCCESS, error=None)

    def fail(self, error: SearchError) -> SearchState:
        # Results from the previous success stay visible under the error.
        return self._swap(status=SearchStatus.ERROR, error=error)

    def _swap(self, **changes) -> SearchState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("search_state_listener_failed", status=self._state.status.value)
        return self._state


__all__ = [
    "SearchState",
    "SearchStateHolder",
    "SearchStatus",
    "StateListener",
]
