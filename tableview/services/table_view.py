"""Composes a ``TableViewState`` into the full table view tree.

Layout, top to bottom: navigation row (pager, New, field-buttons toggle and
the search box), show-hidden-columns row, the table, the nothing-found
block, bottom buttons, the pager again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from tableview.services import actions, columns
from tableview.services.actions import ButtonSpec
from tableview.services.formatting import DefaultFormatter, Formatter, render_context
from tableview.services.pagination import ControlKind, PageControl, compute_window
from tableview.services.sorting import INDICATOR_TEXT, indicator_for
from tableview.services.table_state import FieldSpec, TableViewState
from tableview.services.view_tree import Node, el

logger = logging.getLogger(__name__)

ACTIONS_HEADER_LABEL = "Actions"


def build_table(state: TableViewState, formatter: Formatter | None = None) -> Node:
    """Root function for building the table view tree."""
    formatter = formatter or state.config.formatter or DefaultFormatter()
    shown = columns.visible(state.fields)

    table = el(
        "table",
        _head_section(shown, state, formatter),
        _body_section(shown, state, formatter),
        class_="tv-table",
    )
    wrapper = el("div", table, _nothing_found(state), class_="tv-table-wrapper")
    tree = _build_outer(wrapper, state, formatter)

    logger.debug(
        "Composed table view: rows=%d visible_columns=%d page=%d/%d",
        len(state.rows),
        len(shown),
        state.page.current_page,
        state.page.total_pages,
    )
    return tree


def _build_outer(contents: Node, state: TableViewState, formatter: Formatter) -> Node:
    search_box = _build_search(state)
    new_button = _new_button(state)
    pagination = _build_pagination(state)
    show_hide_fields = _show_hide_fields_button(state)

    top_navigation = el(
        "div",
        el("div", pagination, new_button, show_hide_fields, class_="tv-pagination-wrapper"),
        search_box,
        class_="tv-row",
    )
    bottom_buttons = el("div", new_button, show_hide_fields, class_="tv-bottom-buttons")

    return el(
        "div",
        top_navigation,
        _show_buttons(state, formatter),
        contents,
        bottom_buttons,
        pagination,
        class_="tv-outer-wrapper",
    )


# Header


def _head_section(shown: list[FieldSpec], state: TableViewState, formatter: Formatter) -> Node:
    cells = [_table_header(spec, state, formatter) for spec in shown]
    if actions.has_actions_column(state):
        cells.append(el("th", ACTIONS_HEADER_LABEL, class_="tv-actions-header"))
    return el("thead", el("tr", *cells, class_="tv-header-row"))


def _table_header(spec: FieldSpec, state: TableViewState, formatter: Formatter) -> Node:
    return el(
        "th",
        formatter.header_label(spec),
        _hide_link_for(spec),
        _sort_link_for(spec, state),
        data_column=spec.key,
    )


def _hide_link_for(spec: FieldSpec) -> Node:
    toggle = columns.hide_toggle(spec)
    return el("a", toggle.label, event=toggle.event, payload=toggle.key, class_="tv-hide-link")


def _sort_link_for(spec: FieldSpec, state: TableViewState) -> Node | None:
    if not spec.sortable:
        return None
    indicator = indicator_for(spec.key, state.sort)
    return el(
        "a",
        INDICATOR_TEXT[indicator],
        event="sort_column",
        payload=spec.key,
        class_="tv-sort-link",
        data_sort=indicator.value,
    )


# Body


def _body_section(shown: list[FieldSpec], state: TableViewState, formatter: Formatter) -> Node:
    context = render_context(state)
    rows = [_build_row(entry, shown, state, formatter, context) for entry in state.rows]
    return el("tbody", *rows)


def _build_row(
    entry: Any,
    shown: list[FieldSpec],
    state: TableViewState,
    formatter: Formatter,
    context: Mapping[str, Any],
) -> Node:
    values = [
        el("td", _value_leaf(formatter.field_value(entry, spec, context)), data_column=spec.key)
        for spec in shown
    ]
    return el("tr", *values, _build_actions(entry, state), class_="tv-data-row")


def _value_leaf(value: Any) -> Any:
    # Nodes from custom formatters are positioned as they are.
    if isinstance(value, Node):
        return value
    return "" if value is None else value


def _build_actions(entry: Any, state: TableViewState) -> Node | None:
    if not actions.has_actions_column(state):
        return None
    buttons = [_action_link(button) for button in actions.row_buttons(entry, state)]
    return el("td", *buttons, class_="tv-actions-cell")


def _nothing_found(state: TableViewState) -> Node | None:
    if state.rows:
        return None
    return el("div", state.config.nothing_found_text, class_="tv-nothing-found")


# Search


def _build_search(state: TableViewState) -> Node | None:
    if not any(spec.searchable for spec in state.config.fields):
        return None
    field = el(
        "input",
        event="search",
        type="text",
        name="search",
        value=state.search,
        placeholder="Search",
        autocomplete="off",
        class_="tv-search-field",
        data_debounce=state.config.debounce,
    )
    counter = el(
        "div",
        el("span", str(state.page.total_count), class_="tv-counter-field"),
        class_="tv-counter-field-wrapper",
    )
    form = el(
        "form",
        el("div", field, counter, class_="tv-search-field-wrapper"),
        class_="tv-search-form",
    )
    return el("div", form, class_="tv-search-wrapper")


# Pagination


def _build_pagination(state: TableViewState) -> Node:
    window = compute_window(state.page)
    items = [_paginate_button(control) for control in window.controls]
    return el(
        "nav",
        el("ul", *items, class_="tv-pagination-ul"),
        class_="tv-pagination-nav",
    )


def _paginate_button(control: PageControl) -> Node:
    link_class = "tv-pagination-a"
    if control.kind in (ControlKind.page, ControlKind.ellipsis):
        link_class = "tv-pagination-a tv-pagination-width"

    if control.current:
        link = el("a", control.label, class_=link_class, aria_current="page")
        return el("li", link, class_="tv-pagination-li-active")
    if not control.enabled or control.target is None:
        link = el("a", control.label, class_=link_class, tabindex="-1")
        return el("li", link, class_="tv-pagination-li-disabled")
    link = el(
        "a",
        control.label,
        event="change_page",
        payload=control.target,
        class_=link_class,
    )
    return el("li", link, class_="tv-pagination-li")


# Buttons


def _action_link(button: ButtonSpec) -> Node:
    if button.requires_confirmation:
        return el(
            "a",
            button.label,
            href=button.destination,
            class_=f"tv-action-{button.kind.value}",
            rel="nofollow",
            data_method=button.http_method.lower(),
            data_to=button.destination,
            data_confirm=actions.CONFIRM_MESSAGE,
            data_csrf=button.csrf_token,
        )
    return el(
        "a",
        button.label,
        href=button.destination,
        class_=f"tv-action-{button.kind.value}",
    )


def _new_button(state: TableViewState) -> Node | None:
    button = actions.new_button(state)
    if button is None:
        return None
    return _action_link(button)


def _show_buttons(state: TableViewState, formatter: Formatter) -> Node | None:
    if not state.show_field_buttons:
        return None
    toggles = columns.show_toggles(state.fields, label_for=formatter.header_label)
    if not toggles:
        return None
    links = [
        el("a", toggle.label, event=toggle.event, payload=toggle.key, class_="tv-show-button")
        for toggle in toggles
    ]
    return el("div", *links, class_="tv-show-buttons")


def _show_hide_fields_button(state: TableViewState) -> Node:
    if state.show_field_buttons:
        name, event = "Hide Field Buttons", "hide_buttons"
    else:
        name, event = "Show Field Buttons", "show_buttons"
    return el("a", name, event=event, class_="tv-info-button")
