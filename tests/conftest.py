"""Shared fixtures for Kakao search tests."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from neareat.config import KakaoLocalSettings


def make_document(index: int, **overrides) -> dict:
    document = {
        "id": f"{1000 + index}",
        "place_name": f"식당 {index}",
        "road_address_name": f"서울 강남구 테헤란로 {index}",
        "address_name": f"서울 강남구 역삼동 {index}",
        "distance": f"{index * 100}",
        "phone": f"02-000-{index:04d}",
        "place_url": f"http://place.map.kakao.com/{1000 + index}",
        "x": "127.0276",
        "y": "37.4979",
        "category_group_code": "FD6",
    }
    document.update(overrides)
    return document


@pytest.fixture
def kakao_settings() -> KakaoLocalSettings:
    return KakaoLocalSettings(api_key=SecretStr("test-key"))


@pytest.fixture
def search_payload() -> dict:
    return {
        "documents": [make_document(1), make_document(2), make_document(3)],
        "meta": {"total_count": 3, "pageable_count": 3, "is_end": True},
    }


@pytest.fixture
def document_factory():
    return make_document
