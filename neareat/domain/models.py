"""Pydantic models for Kakao Local search results and device positions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Place(BaseModel):
    """One restaurant returned by the keyword search.

    Coordinates and distance stay as the decimal strings Kakao sends so that
    nothing is lost to float rounding.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(alias="place_name", min_length=1)
    road_address: str = Field(alias="road_address_name")
    address: str = Field(alias="address_name")
    distance: str | None = None
    phone: str | None = None
    detail_url: str = Field(alias="place_url", min_length=1)
    longitude: str = Field(alias="x")
    latitude: str = Field(alias="y")

    @property
    def display_address(self) -> str:
        return self.road_address or self.address


class KakaoSearchResponse(BaseModel):
    """Subset of the keyword-search payload; `meta` and friends are ignored."""

    documents: list[Place]


class LocationSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    horizontal_accuracy: float | None = Field(default=None, ge=0)


__all__ = [
    "KakaoSearchResponse",
    "LocationSample",
    "Place",
]
