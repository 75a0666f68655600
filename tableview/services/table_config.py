from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from tableview.config import settings
from tableview.errors import (
    InvalidPageError,
    MissingParentLoaderError,
    UnknownParentError,
    UnknownTableError,
)
from tableview.rendering import render_html
from tableview.schemas.table_view import TableQueryParams
from tableview.services.actions import RouteResolver
from tableview.services.formatting import Formatter
from tableview.services.table_state import (
    ActionKind,
    FieldSpec,
    PageState,
    ParentResolver,
    SortDirection,
    SortSpec,
    TableConfig,
    TableViewState,
)
from tableview.services.table_view import build_table
from tableview.services.view_tree import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableQuery:
    """What the data source has to fetch for one render."""

    sort: SortSpec | None
    search: str
    page: int
    per_page: int
    searchable_keys: tuple[str, ...]
    parent: Any = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class TablePage:
    rows: Sequence[Any]
    total_count: int


DataSource = Callable[[TableQuery], TablePage]
ParentLoader = Callable[[str], Any]


@dataclass(frozen=True)
class TableDefinition:
    table_key: str
    config: TableConfig
    data_source: DataSource
    # Maps the ``parent`` request parameter to the owning entity.
    parent_loader: ParentLoader | None = None


class TableRegistry:
    _tables: dict[str, TableDefinition] = {}

    @classmethod
    def register(
        cls,
        *,
        table_key: str,
        fields: Sequence[FieldSpec],
        data_source: DataSource,
        action_buttons: Sequence[ActionKind | str] = (),
        routes: RouteResolver | None = None,
        per_page: int | None = None,
        formatter: Formatter | None = None,
        parent_resolver: ParentResolver | None = None,
        parent_loader: ParentLoader | None = None,
        field_overrides: dict[str, dict[str, Any]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> TableDefinition:
        if not table_key:
            raise ValueError("table_key is required")

        overrides = field_overrides or {}
        resolved_fields = []
        for spec in fields:
            meta = overrides.get(spec.key, {})
            resolved_fields.append(
                FieldSpec(
                    key=spec.key,
                    label=meta.get("label", spec.label),
                    hidden=bool(meta.get("hidden", spec.hidden)),
                    sortable=bool(meta.get("sortable", spec.sortable)),
                    searchable=bool(meta.get("searchable", spec.searchable)),
                    formatter=meta.get("formatter", spec.formatter),
                )
            )

        config = TableConfig(
            fields=tuple(resolved_fields),
            routes=routes,
            action_buttons=tuple(ActionKind(kind) for kind in action_buttons),
            per_page=per_page or settings.default_per_page,
            formatter=formatter,
            parent_resolver=parent_resolver,
            context=context or {},
        )
        definition = TableDefinition(
            table_key=table_key,
            config=config,
            data_source=data_source,
            parent_loader=parent_loader,
        )
        cls._tables[table_key] = definition
        logger.debug("Registered table %s with %d fields", table_key, len(config.fields))
        return definition

    @classmethod
    def get(cls, table_key: str) -> TableDefinition:
        definition = cls._tables.get(table_key)
        if not definition:
            raise UnknownTableError(f"Unregistered table: {table_key}")
        return definition

    @classmethod
    def exists(cls, table_key: str) -> bool:
        return table_key in cls._tables

    @classmethod
    def unregister(cls, table_key: str) -> None:
        cls._tables.pop(table_key, None)


class TableViewService:
    @staticmethod
    def _sort_from_params(params: TableQueryParams) -> SortSpec | None:
        if not params.sort_by:
            return None
        return SortSpec(key=params.sort_by, direction=SortDirection(params.sort_dir))

    @staticmethod
    def _visible_keys_from_params(
        config: TableConfig, params: TableQueryParams
    ) -> frozenset[str] | None:
        if params.hidden is None:
            return None
        hidden_keys = {key for key in params.hidden_keys() if config.get_field(key)}
        return frozenset(spec.key for spec in config.fields if spec.key not in hidden_keys)

    @staticmethod
    def _per_page(definition: TableDefinition, params: TableQueryParams) -> int:
        per_page = params.per_page or definition.config.per_page
        if per_page < 1 or per_page > settings.max_per_page:
            raise InvalidPageError(
                f"per_page must be between 1 and {settings.max_per_page}"
            )
        return per_page

    @staticmethod
    def build_state(
        definition: TableDefinition,
        params: TableQueryParams,
        *,
        csrf_token: str | None = None,
        rows: Sequence[Any] = (),
        total_count: int = 0,
    ) -> TableViewState:
        """State described by request params, before any rows are fetched."""
        config = definition.config
        parent = None
        if params.parent is not None:
            if definition.parent_loader is None:
                raise MissingParentLoaderError(
                    f"Table {definition.table_key} does not accept a parent"
                )
            parent = definition.parent_loader(params.parent)
            if parent is None:
                raise UnknownParentError(f"Unknown parent: {params.parent}")
        return TableViewState(
            config=config,
            rows=tuple(rows),
            sort=TableViewService._sort_from_params(params),
            page=PageState(
                current_page=params.page,
                per_page=TableViewService._per_page(definition, params),
                total_count=total_count,
            ),
            search=params.search.strip(),
            visible_column_keys=TableViewService._visible_keys_from_params(config, params),
            parent_entity=parent,
            show_field_buttons=params.show_field_buttons,
            csrf_token=csrf_token,
        )

    @staticmethod
    def fetch(definition: TableDefinition, state: TableViewState) -> TableViewState:
        """Ask the table's data source for the page ``state`` describes."""
        query = TableQuery(
            sort=state.sort,
            search=state.search,
            page=state.page.current_page,
            per_page=state.page.per_page,
            searchable_keys=tuple(
                spec.key for spec in definition.config.fields if spec.searchable
            ),
            parent=state.parent_entity,
        )
        result = definition.data_source(query)
        return state.evolve(
            rows=tuple(result.rows),
            page=PageState(
                current_page=state.page.current_page,
                per_page=state.page.per_page,
                total_count=result.total_count,
            ),
        )

    @staticmethod
    def to_params(state: TableViewState, parent: str | None = None) -> TableQueryParams:
        hidden = None
        if state.visible_column_keys is not None:
            hidden = ",".join(
                spec.key
                for spec in state.config.fields
                if spec.key not in state.visible_column_keys
            )
        return TableQueryParams(
            page=state.page.current_page,
            per_page=state.page.per_page,
            sort_by=state.sort.key if state.sort else None,
            sort_dir=state.sort.direction.value if state.sort else "asc",
            search=state.search,
            hidden=hidden,
            show_field_buttons=state.show_field_buttons,
            parent=parent,
        )

    @staticmethod
    def render(
        table_key: str,
        params: TableQueryParams,
        *,
        csrf_token: str | None = None,
    ) -> tuple[TableViewState, Node]:
        definition = TableRegistry.get(table_key)
        state = TableViewService.build_state(definition, params, csrf_token=csrf_token)
        state = TableViewService.fetch(definition, state)
        return state, build_table(state)

    @staticmethod
    def render_html(
        table_key: str,
        params: TableQueryParams,
        *,
        csrf_token: str | None = None,
    ) -> str:
        _, tree = TableViewService.render(table_key, params, csrf_token=csrf_token)
        return str(render_html(tree))
