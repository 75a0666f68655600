"""Table view composition services."""

from __future__ import annotations

from tableview.services.table_events import apply_event
from tableview.services.table_state import (
    ActionKind,
    FieldSpec,
    PageState,
    SortSpec,
    TableConfig,
    TableViewState,
)
from tableview.services.table_view import build_table

__all__ = [
    "ActionKind",
    "FieldSpec",
    "PageState",
    "SortSpec",
    "TableConfig",
    "TableViewState",
    "apply_event",
    "build_table",
]
