"""Location-triggered restaurant search against the Kakao Local API."""

from __future__ import annotations

import random
from typing import Any

import httpx
from pydantic import ValidationError

from neareat.config import KakaoLocalSettings
from neareat.domain.models import KakaoSearchResponse, Place
from neareat.logging import logger
from neareat.services.exceptions import (
    DecodeFailure,
    LocationUnavailable,
    SearchError,
    ServerError,
    TransportFailure,
)
from neareat.services.location import LocationProvider
from neareat.services.request_builder import Coordinate, build_search_request
from neareat.services.state import SearchState, SearchStateHolder

ERROR_BODY_PREVIEW_CHARS = 500


class RestaurantSearch:
    """Owns the search state of one user and drives it through a search.

    Overlapping calls resolve as latest-call-wins: a response that arrives
    after a newer call has started is dropped without touching the state, and
    that call returns ``None``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: KakaoLocalSettings | None = None,
        *,
        state: SearchStateHolder | None = None,
        location: LocationProvider | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or KakaoLocalSettings()
        self.state = state or SearchStateHolder()
        self.location = location or LocationProvider()
        self._generation = 0

    async def trigger_search(self, query: str | None = None) -> SearchState | None:
        """Search around the latest known position using ``query`` or the stored one.

        Returns ``None`` when a newer search took over before this one finished.
        """

        text = self.state.snapshot.query if query is None else query
        sample = self.location.last_known()
        if sample is None:
            self._generation += 1
            logger.info("search_blocked_without_location", query=text)
            self.state.set_query(text)
            return self.state.fail(LocationUnavailable())
        return await self.search(text, sample.latitude, sample.longitude)

    async def search(self, query: str, latitude: Coordinate, longitude: Coordinate) -> SearchState | None:
        self._generation += 1
        generation = self._generation
        self.state.begin(query)
        logger.info("search_started", query=query, latitude=latitude, longitude=longitude)

        try:
            places = await self._fetch(query, latitude, longitude)
        except SearchError as exc:
            if generation != self._generation:
                logger.info("search_superseded", query=query, outcome="error")
                return None
            logger.warning("search_failed", query=query, code=exc.code, error=str(exc), detail=exc.detail)
            return self.state.fail(exc)

        if generation != self._generation:
            logger.info("search_superseded", query=query, outcome="success")
            return None
        logger.info("search_succeeded", query=query, result_count=len(places))
        return self.state.succeed(places)

    def pick_random(self, rng: random.Random | None = None) -> Place | None:
        results = self.state.snapshot.results
        if not results:
            return None
        return (rng or random).choice(results)

    async def _fetch(self, query: str, latitude: Coordinate, longitude: Coordinate) -> list[Place]:
        request = build_search_request(
            query,
            latitude,
            longitude,
            api_key=self._read_secret(self._settings.api_key),
        )

        request_kwargs: dict[str, Any] = {"headers": request.headers}
        if self._settings.request_timeout_seconds is not None:
            request_kwargs["timeout"] = self._settings.request_timeout_seconds

        try:
            response = await self._client.get(request.url, **request_kwargs)
        except httpx.RequestError as exc:
            raise TransportFailure(str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise ServerError(response.status_code, response.text[:ERROR_BODY_PREVIEW_CHARS])

        try:
            payload = KakaoSearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailure(_summarize_validation_error(exc)) from exc
        return payload.documents

    @staticmethod
    def _read_secret(secret: Any) -> str | None:
        if not secret:
            return None
        try:
            return secret.get_secret_value()
        except AttributeError:
            return str(secret)


def _summarize_validation_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "body"
    summary = f"{location}: {first.get('msg', 'invalid value')}"
    if len(errors) > 1:
        summary = f"{summary} (+{len(errors) - 1} more)"
    return summary


__all__ = ["RestaurantSearch"]
