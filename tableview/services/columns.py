"""Visible/hidden column partitioning and the show/hide affordances."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from tableview.services.table_state import FieldSpec


@dataclass(frozen=True)
class ColumnToggle:
    """A request to move ``key`` between the visible and hidden partitions."""

    event: str
    key: str
    label: str


def visible(fields: Iterable[FieldSpec]) -> list[FieldSpec]:
    return [spec for spec in fields if not spec.hidden]


def hidden(fields: Iterable[FieldSpec]) -> list[FieldSpec]:
    return [spec for spec in fields if spec.hidden]


def partition(fields: Sequence[FieldSpec]) -> tuple[list[FieldSpec], list[FieldSpec]]:
    return visible(fields), hidden(fields)


def hide_toggle(spec: FieldSpec) -> ColumnToggle:
    return ColumnToggle(event="hide_column", key=spec.key, label="hide")


def show_toggle(spec: FieldSpec, name: str | None = None) -> ColumnToggle:
    return ColumnToggle(
        event="show_column", key=spec.key, label=f"Show {name or spec.display_name}"
    )


def show_toggles(
    fields: Iterable[FieldSpec], label_for: Callable[[FieldSpec], str] | None = None
) -> list[ColumnToggle]:
    return [
        show_toggle(spec, label_for(spec) if label_for else None) for spec in hidden(fields)
    ]


def hide_column_keys(visible_keys: frozenset[str], key: str) -> frozenset[str]:
    return visible_keys - {key}


def show_column_keys(visible_keys: frozenset[str], key: str) -> frozenset[str]:
    return visible_keys | {key}
