"""Tests for keyword-search request construction."""

from __future__ import annotations

from decimal import Decimal

import pytest

from neareat.services.exceptions import RequestConstructionFailed
from neareat.services.request_builder import build_search_request


@pytest.mark.parametrize(
    ("query", "latitude", "longitude"),
    [
        ("치킨", 37.4979, 127.0276),
        ("", -33.8688, 151.2093),
        ("pizza & pasta?", 0, 0),
        ("國수 #1", Decimal("37.5665"), "126.9780"),
    ],
)
def test_fixed_parameters_always_present(query, latitude, longitude):
    request = build_search_request(query, latitude, longitude, api_key="key")
    params = request.url.params

    assert params["radius"] == "1000"
    assert params["category_group_code"] == "FD6"
    assert params["sort"] == "distance"
    assert params["query"] == query


def test_targets_keyword_endpoint_with_kakao_auth():
    request = build_search_request("국밥", 37.4979, 127.0276, api_key="secret")

    assert request.method == "GET"
    assert request.url.scheme == "https"
    assert request.url.host == "dapi.kakao.com"
    assert request.url.path == "/v2/local/search/keyword.json"
    assert request.headers == {"Authorization": "KakaoAK secret"}


def test_longitude_is_x_and_latitude_is_y():
    request = build_search_request("국밥", 37.4979, 127.0276, api_key="key")

    assert request.url.params["x"] == "127.0276"
    assert request.url.params["y"] == "37.4979"


def test_decimal_coordinates_keep_their_digits():
    request = build_search_request("국밥", Decimal("37.497942"), "127.027621", api_key="key")

    assert request.url.params["y"] == "37.497942"
    assert request.url.params["x"] == "127.027621"


def test_query_is_url_encoded():
    request = build_search_request("치킨 & 맥주", 37.0, 127.0, api_key="key")
    raw_query = request.url.query.decode("ascii")

    assert " " not in raw_query
    assert "&" + "맥주" not in raw_query
    assert request.url.params["query"] == "치킨 & 맥주"


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "north", True])
def test_invalid_coordinate_is_a_construction_failure(bad):
    with pytest.raises(RequestConstructionFailed) as excinfo:
        build_search_request("국밥", bad, 127.0, api_key="key")
    assert str(excinfo.value) == "failed to build search URL"


def test_missing_api_key_is_a_construction_failure():
    with pytest.raises(RequestConstructionFailed):
        build_search_request("국밥", 37.0, 127.0, api_key=None)


@pytest.mark.parametrize(
    ("latitude", "expected"),
    [
        (0.00001, "0.00001"),
        (-0.0000123, "-0.0000123"),
        (Decimal("1E-7"), "0.0000001"),
        ("2.5e-6", "0.0000025"),
        (1e16, "10000000000000000"),
    ],
)
def test_coordinates_never_use_exponent_notation(latitude, expected):
    request = build_search_request("국밥", latitude, 127.0, api_key="key")

    assert request.url.params["y"] == expected
