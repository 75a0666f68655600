from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from tableview.services.table_state import FieldSpec, TableViewState


class Formatter(Protocol):
    def header_label(self, spec: FieldSpec) -> str:
        ...

    def field_value(self, entity: Any, spec: FieldSpec, context: Mapping[str, Any]) -> Any:
        ...


def read_value(entity: Any, key: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


class DefaultFormatter:
    """Labels from ``FieldSpec.display_name``, values read off the entity.

    A field's own ``formatter`` callable wins over the plain read and gets
    the render context.
    """

    def header_label(self, spec: FieldSpec) -> str:
        return spec.display_name

    def field_value(self, entity: Any, spec: FieldSpec, context: Mapping[str, Any]) -> Any:
        if spec.formatter is not None:
            value = spec.formatter(entity, context)
        else:
            value = read_value(entity, spec.key)
        if value is None:
            return ""
        return value


def render_context(state: TableViewState) -> dict[str, Any]:
    """Caller context merged with the live table state, for field formatters."""
    context: dict[str, Any] = dict(state.config.context)
    context.update(
        {
            "search": state.search,
            "sort": state.sort,
            "page": state.page,
            "parent": state.parent_entity,
            "csrf_token": state.csrf_token,
        }
    )
    return context
