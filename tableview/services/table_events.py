"""State transitions requested by clicks and keystrokes on a rendered table.

Every transition returns a new ``TableViewState``. The rows it carries are
stale until the caller refetches them for the new sort/search/page.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import replace

from tableview.errors import InvalidPageError, TableConfigError, UnknownEventError
from tableview.services import columns
from tableview.services.sorting import next_sort
from tableview.services.table_state import TableViewState

logger = logging.getLogger(__name__)


class TableEvent(enum.Enum):
    sort_column = "sort_column"
    hide_column = "hide_column"
    show_column = "show_column"
    change_page = "change_page"
    search = "search"
    show_buttons = "show_buttons"
    hide_buttons = "hide_buttons"


def _column_key(state: TableViewState, value: str | None) -> str:
    if not value or state.config.get_field(value) is None:
        raise TableConfigError(f"Unknown column: {value}")
    return value


def sort_column(state: TableViewState, key: str | None) -> TableViewState:
    key = _column_key(state, key)
    return state.evolve(sort=next_sort(state.sort, key))


def hide_column(state: TableViewState, key: str | None) -> TableViewState:
    key = _column_key(state, key)
    return state.evolve(visible_column_keys=columns.hide_column_keys(state.visible_keys(), key))


def show_column(state: TableViewState, key: str | None) -> TableViewState:
    key = _column_key(state, key)
    return state.evolve(visible_column_keys=columns.show_column_keys(state.visible_keys(), key))


def change_page(state: TableViewState, value: str | int | None) -> TableViewState:
    try:
        requested = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidPageError(f"Invalid page: {value!r}") from exc
    last_page = max(state.page.total_pages, 1)
    target = min(max(requested, 1), last_page)
    return state.evolve(page=replace(state.page, current_page=target))


def search(state: TableViewState, term: str | None) -> TableViewState:
    return state.evolve(
        search=(term or "").strip(),
        page=replace(state.page, current_page=1),
    )


def apply_event(
    state: TableViewState, event: str | TableEvent, value: str | None = None
) -> TableViewState:
    try:
        kind = TableEvent(event)
    except ValueError as exc:
        raise UnknownEventError(f"Unknown table event: {event}") from exc

    if kind is TableEvent.sort_column:
        new_state = sort_column(state, value)
    elif kind is TableEvent.hide_column:
        new_state = hide_column(state, value)
    elif kind is TableEvent.show_column:
        new_state = show_column(state, value)
    elif kind is TableEvent.change_page:
        new_state = change_page(state, value)
    elif kind is TableEvent.search:
        new_state = search(state, value)
    elif kind is TableEvent.show_buttons:
        new_state = state.evolve(show_field_buttons=True)
    else:
        new_state = state.evolve(show_field_buttons=False)

    logger.info("Applied table event %s value=%s", kind.value, value)
    return new_state
