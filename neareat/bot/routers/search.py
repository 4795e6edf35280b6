"""Telegram handlers for location sharing and restaurant search."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import KeyboardButton, Message, ReplyKeyboardMarkup
from pydantic import ValidationError

from neareat.bot.utils.formatting import format_place, place_link_keyboard, render_results
from neareat.bot.utils.telegram import answer_with_retry
from neareat.config import get_settings
from neareat.domain.models import LocationSample
from neareat.i18n import I18nService
from neareat.logging import logger
from neareat.services.search import RestaurantSearch
from neareat.services.state import SearchState, SearchStatus

router = Router()


def _i18n() -> I18nService:
    return I18nService(default_locale=get_settings().default_language)


def _locale(message: Message) -> str | None:
    return getattr(message.from_user, "language_code", None)


def _location_keyboard(i18n: I18nService, locale: str | None) -> ReplyKeyboardMarkup:
    button = KeyboardButton(
        text=i18n.gettext("start.share_location", locale=locale),
        request_location=True,
    )
    return ReplyKeyboardMarkup(keyboard=[[button]], resize_keyboard=True)


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    i18n = _i18n()
    locale = _locale(message)
    name = getattr(message.from_user, "full_name", None) or ""
    await answer_with_retry(
        message,
        i18n.gettext("start.greeting", locale=locale, name=name),
        parse_mode=None,
        reply_markup=_location_keyboard(i18n, locale),
    )


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    i18n = _i18n()
    await answer_with_retry(message, i18n.gettext("help.text", locale=_locale(message)), parse_mode=None)


@router.message(F.location)
async def handle_location(message: Message, search: RestaurantSearch) -> None:
    i18n = _i18n()
    locale = _locale(message)
    if _publish_location(message, search):
        text = i18n.gettext("location.saved", locale=locale)
    else:
        text = i18n.gettext("location.invalid", locale=locale)
    await answer_with_retry(message, text, parse_mode=None)


@router.edited_message(F.location)
async def handle_live_location(message: Message, search: RestaurantSearch) -> None:
    # Live location updates arrive as edits; store them silently.
    _publish_location(message, search)


@router.message(Command("search"))
async def handle_search_command(
    message: Message,
    search: RestaurantSearch,
    command: CommandObject | None = None,
) -> None:
    query = (command.args or "").strip() if command is not None else ""
    if not query:
        i18n = _i18n()
        await answer_with_retry(message, i18n.gettext("search.usage", locale=_locale(message)), parse_mode=None)
        return
    await _run_search(message, search, query)


@router.message(Command("random"))
async def handle_random(message: Message, search: RestaurantSearch) -> None:
    i18n = _i18n()
    locale = _locale(message)
    place = search.pick_random()
    if place is None:
        await answer_with_retry(message, i18n.gettext("random.empty", locale=locale), parse_mode=None)
        return

    logger.info("random_pick", chat_id=_chat_id(message), place_id=place.id)
    text = f"{i18n.gettext('random.pick', locale=locale)}\n\n{format_place(place, i18n, locale)}"
    await answer_with_retry(
        message,
        text,
        parse_mode=None,
        reply_markup=place_link_keyboard([place]),
    )


@router.message(F.text & ~F.text.startswith("/"))
async def handle_text(message: Message, search: RestaurantSearch) -> None:
    query = (message.text or "").strip()
    if not query:
        return
    await _run_search(message, search, query)


async def _run_search(message: Message, search: RestaurantSearch, query: str) -> SearchState | None:
    logger.info("search_requested", chat_id=_chat_id(message), query=query)
    state = await search.trigger_search(query)
    if state is None:
        # A newer search in this chat answers instead.
        return None
    await _render(message, state)
    return state


async def _render(message: Message, state: SearchState) -> None:
    i18n = _i18n()
    locale = _locale(message)

    if state.status is SearchStatus.ERROR and state.error is not None:
        error = state.error
        text = i18n.gettext(f"error.{error.code}", locale=locale, **error.params)
        await answer_with_retry(message, text, parse_mode=None)
        return

    rendered = render_results(state.query, state.results, i18n, locale)
    await answer_with_retry(
        message,
        rendered.text,
        parse_mode=None,
        reply_markup=place_link_keyboard(rendered.places),
    )


def _publish_location(message: Message, search: RestaurantSearch) -> bool:
    location = message.location
    try:
        sample = LocationSample(
            latitude=location.latitude,
            longitude=location.longitude,
            horizontal_accuracy=getattr(location, "horizontal_accuracy", None),
        )
    except ValidationError as exc:
        search.location.report_failure(exc)
        return False
    search.location.publish(sample)
    return True


def _chat_id(message: Message) -> int | None:
    chat = getattr(message, "chat", None)
    return getattr(chat, "id", None)


__all__ = [
    "handle_help",
    "handle_live_location",
    "handle_location",
    "handle_random",
    "handle_search_command",
    "handle_start",
    "handle_text",
    "router",
]
