"""Immutable inputs of a table render.

A render consumes one ``TableViewState`` snapshot. ``TableConfig`` holds the
options fixed when the table is declared; the remaining state fields change
with every interaction and are replaced, never mutated.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from tableview.config import settings
from tableview.errors import (
    DuplicateFieldError,
    InvalidPageError,
    InvalidSortError,
    MissingParentResolverError,
)

if TYPE_CHECKING:
    from tableview.services.actions import RouteResolver
    from tableview.services.formatting import Formatter

FieldFormatter = Callable[[Any, Mapping[str, Any]], Any]
ParentResolver = Callable[[Any], Any]


class SortDirection(enum.Enum):
    asc = "asc"
    desc = "desc"


class ActionKind(enum.Enum):
    new = "new"
    show = "show"
    edit = "edit"
    delete = "delete"


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: SortDirection

    @classmethod
    def asc(cls, key: str) -> SortSpec:
        return cls(key=key, direction=SortDirection.asc)

    @classmethod
    def desc(cls, key: str) -> SortSpec:
        return cls(key=key, direction=SortDirection.desc)


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str | None = None
    hidden: bool = False
    sortable: bool = True
    searchable: bool = True
    formatter: FieldFormatter | None = None

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return self.key.replace("_", " ").title()


def page_count(total_count: int, per_page: int) -> int:
    return (total_count + per_page - 1) // per_page if total_count > 0 else 0


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    per_page: int = settings.default_per_page
    total_count: int = 0

    def __post_init__(self) -> None:
        if self.per_page <= 0:
            raise InvalidPageError(f"per_page must be positive, got {self.per_page}")
        if self.current_page < 1:
            raise InvalidPageError(f"current_page must be >= 1, got {self.current_page}")
        if self.total_count < 0:
            raise InvalidPageError(f"total_count must be >= 0, got {self.total_count}")

    @property
    def total_pages(self) -> int:
        return page_count(self.total_count, self.per_page)


@dataclass(frozen=True)
class TableConfig:
    """Every option a table recognises, fixed for the life of the table."""

    fields: tuple[FieldSpec, ...]
    routes: RouteResolver | None = None
    action_buttons: tuple[ActionKind, ...] = ()
    per_page: int = settings.default_per_page
    debounce: int = settings.search_debounce_ms
    formatter: Formatter | None = None
    parent_resolver: ParentResolver | None = None
    context: Mapping[str, Any] = field(default_factory=dict)
    nothing_found_text: str = settings.nothing_found_text

    def __post_init__(self) -> None:
        # Accept lists from callers, keep tuples internally.
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(
            self, "action_buttons", tuple(ActionKind(kind) for kind in self.action_buttons)
        )
        seen: set[str] = set()
        for spec in self.fields:
            if spec.key in seen:
                raise DuplicateFieldError(f"Duplicate field key: {spec.key}")
            seen.add(spec.key)
        if self.per_page <= 0:
            raise InvalidPageError(f"per_page must be positive, got {self.per_page}")

    def get_field(self, key: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None

    @property
    def row_actions(self) -> tuple[ActionKind, ...]:
        return tuple(kind for kind in self.action_buttons if kind is not ActionKind.new)

    def default_visible_keys(self) -> frozenset[str]:
        return frozenset(spec.key for spec in self.fields if not spec.hidden)


@dataclass(frozen=True)
class TableViewState:
    config: TableConfig
    rows: tuple[Any, ...] = ()
    sort: SortSpec | None = None
    page: PageState = field(default_factory=PageState)
    search: str = ""
    # None means "use each field's configured hidden flag".
    visible_column_keys: frozenset[str] | None = None
    parent_entity: Any = None
    show_field_buttons: bool = False
    csrf_token: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))
        if self.visible_column_keys is not None:
            object.__setattr__(self, "visible_column_keys", frozenset(self.visible_column_keys))
        validate_state(self)

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        if self.visible_column_keys is None:
            return self.config.fields
        return tuple(
            replace(spec, hidden=spec.key not in self.visible_column_keys)
            for spec in self.config.fields
        )

    @property
    def action_buttons(self) -> tuple[ActionKind, ...]:
        return self.config.action_buttons

    @property
    def is_nested(self) -> bool:
        return self.parent_entity is not None

    def visible_keys(self) -> frozenset[str]:
        if self.visible_column_keys is None:
            return self.config.default_visible_keys()
        return self.visible_column_keys

    def evolve(self, **changes: Any) -> TableViewState:
        return replace(self, **changes)


def validate_state(state: TableViewState) -> None:
    """Raise a ``TableConfigError`` when the state cannot be rendered."""
    if state.sort is not None:
        spec = state.config.get_field(state.sort.key)
        if spec is None:
            raise InvalidSortError(f"Unknown sort field: {state.sort.key}")
        if not spec.sortable:
            raise InvalidSortError(f"Field is not sortable: {state.sort.key}")
    if state.is_nested and state.config.row_actions and state.config.parent_resolver is None:
        raise MissingParentResolverError(
            "Nested tables with row actions need a parent_resolver"
        )
