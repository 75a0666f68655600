"""Action buttons (new/show/edit/delete) and the routing contract they use."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from tableview.errors import MissingParentResolverError, TableConfigError
from tableview.services.table_state import ActionKind, TableViewState

CONFIRM_MESSAGE = "Are you sure?"

ACTION_LABELS = {
    ActionKind.new: "New",
    ActionKind.show: "Show",
    ActionKind.edit: "Edit",
    ActionKind.delete: "Delete",
}


class RouteResolver(Protocol):
    def collection_path(self, kind: ActionKind, parent: Any = None) -> str:
        ...

    def entity_path(self, kind: ActionKind, entity: Any, parent: Any = None) -> str:
        ...


@dataclass(frozen=True)
class ButtonSpec:
    kind: ActionKind
    label: str
    destination: str
    http_method: str = "GET"
    requires_confirmation: bool = False
    csrf_token: str | None = None


def _routes(state: TableViewState) -> RouteResolver:
    routes = state.config.routes
    if routes is None:
        raise TableConfigError("Action buttons need a route resolver")
    return routes


def _button(kind: ActionKind, destination: str, state: TableViewState) -> ButtonSpec:
    if kind is ActionKind.delete:
        return ButtonSpec(
            kind=kind,
            label=ACTION_LABELS[kind],
            destination=destination,
            http_method="DELETE",
            requires_confirmation=True,
            csrf_token=state.csrf_token,
        )
    return ButtonSpec(kind=kind, label=ACTION_LABELS[kind], destination=destination)


def resolve(kind: ActionKind, entity: Any, state: TableViewState) -> ButtonSpec:
    routes = _routes(state)
    if kind is ActionKind.new:
        if state.is_nested:
            destination = routes.collection_path(kind, parent=state.parent_entity)
        else:
            destination = routes.collection_path(kind)
        return _button(kind, destination, state)

    if entity is None:
        raise TableConfigError(f"{kind.value} action needs an entity")
    if state.is_nested:
        parent_resolver = state.config.parent_resolver
        if parent_resolver is None:
            raise MissingParentResolverError(
                f"{kind.value} action on a nested table needs a parent_resolver"
            )
        destination = routes.entity_path(kind, entity, parent=parent_resolver(entity))
    else:
        destination = routes.entity_path(kind, entity)
    return _button(kind, destination, state)


def new_button(state: TableViewState) -> ButtonSpec | None:
    if ActionKind.new not in state.action_buttons:
        return None
    return resolve(ActionKind.new, None, state)


def row_buttons(entity: Any, state: TableViewState) -> list[ButtonSpec]:
    return [resolve(kind, entity, state) for kind in state.config.row_actions]


def has_actions_column(state: TableViewState) -> bool:
    return bool(state.config.row_actions)
