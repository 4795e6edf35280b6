"""Construction of Kakao Local keyword-search requests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

import httpx

from neareat.services.exceptions import RequestConstructionFailed

KEYWORD_SEARCH_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
SEARCH_RADIUS_METERS = 1000
FOOD_CATEGORY_GROUP_CODE = "FD6"
SORT_ORDER = "distance"

Coordinate = Union[float, int, Decimal, str]


@dataclass(frozen=True, slots=True)
class SearchRequest:
    url: httpx.URL
    headers: dict[str, str]

    method = "GET"


def build_search_request(
    query: str,
    latitude: Coordinate,
    longitude: Coordinate,
    *,
    api_key: str | None,
) -> SearchRequest:
    """Build the GET request for a food search around ``(latitude, longitude)``."""

    if not api_key:
        raise RequestConstructionFailed("Kakao REST API key is not configured.")

    params = {
        "query": query,
        "x": _format_coordinate(longitude),
        "y": _format_coordinate(latitude),
        "radius": str(SEARCH_RADIUS_METERS),
        "category_group_code": FOOD_CATEGORY_GROUP_CODE,
        "sort": SORT_ORDER,
    }
    try:
        url = httpx.URL(KEYWORD_SEARCH_URL, params=params)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestConstructionFailed(str(exc)) from exc

    return SearchRequest(url=url, headers={"Authorization": f"KakaoAK {api_key}"})


def _format_coordinate(value: Coordinate) -> str:
    if isinstance(value, bool):
        raise RequestConstructionFailed(f"Invalid coordinate: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise RequestConstructionFailed(f"Invalid coordinate: {value!r}")
        return format(Decimal(repr(float(value))), "f")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise RequestConstructionFailed(f"Invalid coordinate: {value!r}") from exc
    if not number.is_finite():
        raise RequestConstructionFailed(f"Invalid coordinate: {value!r}")
    return format(number, "f")


__all__ = [
    "FOOD_CATEGORY_GROUP_CODE",
    "KEYWORD_SEARCH_URL",
    "SEARCH_RADIUS_METERS",
    "SORT_ORDER",
    "SearchRequest",
    "build_search_request",
]
