"""Search failures, each mapped to a single user-facing message."""

from __future__ import annotations

from typing import Any


class SearchError(Exception):
    """Base class for every terminal failure of a search invocation.

    ``code`` selects the localised message; ``params`` fill its placeholders.
    """

    code = "search_error"
    message = "search failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.describe())

    @property
    def params(self) -> dict[str, Any]:
        return {"detail": self.detail or ""}

    def describe(self) -> str:
        return self.message


class LocationUnavailable(SearchError):
    code = "location_unavailable"
    message = "current location is not available yet, please try again shortly"


class RequestConstructionFailed(SearchError):
    code = "request_construction_failed"
    message = "failed to build search URL"


class TransportFailure(SearchError):
    code = "transport_failure"
    message = "failed to load data"

    def describe(self) -> str:
        return f"{self.message}: {self.detail}"


class ServerError(SearchError):
    code = "server_error"
    message = "server responded with status"

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)

    @property
    def params(self) -> dict[str, Any]:
        return {"status_code": self.status_code}

    def describe(self) -> str:
        return f"{self.message} {self.status_code}"


class DecodeFailure(SearchError):
    code = "decode_failure"
    message = "failed to parse data"

    def describe(self) -> str:
        return f"{self.message}: {self.detail}"


__all__ = [
    "DecodeFailure",
    "LocationUnavailable",
    "RequestConstructionFailed",
    "SearchError",
    "ServerError",
    "TransportFailure",
]
