"""Route resolution backed by FastAPI's named routes."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from starlette.routing import NoMatchFound

from tableview.errors import TableConfigError
from tableview.services.formatting import read_value
from tableview.services.table_state import ActionKind


def _default_id(entity: Any) -> Any:
    return read_value(entity, "id")


class UrlForRouteResolver:
    """Maps each action kind to a route name and builds its path with ``url_path_for``.

    Works against anything exposing ``url_path_for`` (a FastAPI app or an
    ``APIRouter``), so tables can be declared before any request exists.
    """

    def __init__(
        self,
        router: Any,
        route_names: Mapping[ActionKind | str, str],
        *,
        id_param: str = "id",
        parent_param: str = "parent_id",
        id_getter: Callable[[Any], Any] = _default_id,
    ) -> None:
        self.router = router
        self.route_names = {ActionKind(kind): name for kind, name in route_names.items()}
        self.id_param = id_param
        self.parent_param = parent_param
        self.id_getter = id_getter

    def _path(self, kind: ActionKind, params: dict[str, Any]) -> str:
        name = self.route_names.get(kind)
        if name is None:
            raise TableConfigError(f"No route configured for the {kind.value} action")
        try:
            return str(self.router.url_path_for(name, **params))
        except NoMatchFound as exc:
            raise TableConfigError(f"Route {name!r} does not accept {sorted(params)}") from exc

    def collection_path(self, kind: ActionKind, parent: Any = None) -> str:
        params: dict[str, Any] = {}
        if parent is not None:
            params[self.parent_param] = self.id_getter(parent)
        return self._path(kind, params)

    def entity_path(self, kind: ActionKind, entity: Any, parent: Any = None) -> str:
        params = {self.id_param: self.id_getter(entity)}
        if parent is not None:
            params[self.parent_param] = self.id_getter(parent)
        return self._path(kind, params)
