"""Plain-text rendering of search results for Telegram."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from neareat.domain.models import Place
from neareat.i18n import I18nService

# Telegram rejects messages longer than 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 3900
BUTTON_LABEL_LIMIT = 40


def format_place(place: Place, i18n: I18nService, locale: str, *, index: int | None = None) -> str:
    title = f"{index}. {place.name}" if index is not None else place.name
    lines = [title]
    if place.display_address:
        lines.append(place.display_address)
    if place.distance:
        lines.append(i18n.gettext("place.distance", locale=locale, distance=place.distance))
    if place.phone:
        lines.append(i18n.gettext("place.phone", locale=locale, phone=place.phone))
    return "\n".join(lines)


class RenderedResults(NamedTuple):
    text: str
    places: list[Place]


def render_results(query: str, places: Sequence[Place], i18n: I18nService, locale: str) -> RenderedResults:
    """Render the result list and report which places fit in the message.

    Places cut off by the length limit are left out of ``places`` so link
    buttons can be built for exactly what the text shows.
    """

    if not places:
        return RenderedResults(i18n.gettext("search.empty", locale=locale, query=query), [])

    header = i18n.gettext("search.header", locale=locale, query=query, count=len(places))
    blocks = [header]
    shown: list[Place] = []
    length = len(header)
    for index, place in enumerate(places, start=1):
        block = format_place(place, i18n, locale, index=index)
        length += len(block) + 2
        if length > TELEGRAM_MESSAGE_LIMIT:
            blocks.append("…")
            break
        blocks.append(block)
        shown.append(place)
    return RenderedResults("\n\n".join(blocks), shown)


def place_link_keyboard(places: Sequence[Place]) -> InlineKeyboardMarkup | None:
    """One URL button per place, opening its Kakao Map detail page."""

    rows = [
        [InlineKeyboardButton(text=_button_label(index, place.name), url=place.detail_url)]
        for index, place in enumerate(places, start=1)
    ]
    if not rows:
        return None
    return InlineKeyboardMarkup(inline_keyboard=rows)


def _button_label(index: int, name: str) -> str:
    label = f"{index}. {name}"
    if len(label) <= BUTTON_LABEL_LIMIT:
        return label
    return f"{label[: BUTTON_LABEL_LIMIT - 1].rstrip()}…"


__all__ = [
    "RenderedResults",
    "format_place",
    "place_link_keyboard",
    "render_results",
]
