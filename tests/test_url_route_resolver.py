import pytest
from fastapi import APIRouter

from tableview.errors import TableConfigError
from tableview.services.table_state import ActionKind
from tableview.web.routing import UrlForRouteResolver
from tests.mocks import Person, Team


def _router() -> APIRouter:
    router = APIRouter()

    @router.get("/people/new", name="people_new")
    def people_new():
        return {}

    @router.get("/people/{id}", name="people_show")
    def people_show(id: int):
        return {}

    @router.get("/people/{id}/edit", name="people_edit")
    def people_edit(id: int):
        return {}

    @router.get("/teams/{parent_id}/people/new", name="team_people_new")
    def team_people_new(parent_id: int):
        return {}

    @router.get("/teams/{parent_id}/people/{id}/edit", name="team_people_edit")
    def team_people_edit(parent_id: int, id: int):
        return {}

    return router


def test_resolves_collection_and_entity_paths():
    resolver = UrlForRouteResolver(
        _router(),
        {"new": "people_new", "show": "people_show", ActionKind.edit: "people_edit"},
    )
    person = Person(id=5, name="Ada", email="ada@example.com")

    assert resolver.collection_path(ActionKind.new) == "/people/new"
    assert resolver.entity_path(ActionKind.show, person) == "/people/5"
    assert resolver.entity_path(ActionKind.edit, person) == "/people/5/edit"


def test_resolves_nested_paths():
    resolver = UrlForRouteResolver(
        _router(), {"new": "team_people_new", "edit": "team_people_edit"}
    )
    team = Team(id=3, name="Ops")
    person = Person(id=5, name="Ada", email="ada@example.com")

    assert resolver.collection_path(ActionKind.new, parent=team) == "/teams/3/people/new"
    assert resolver.entity_path(ActionKind.edit, person, parent=team) == "/teams/3/people/5/edit"


def test_missing_route_name_is_a_config_error():
    resolver = UrlForRouteResolver(_router(), {"new": "people_new"})

    with pytest.raises(TableConfigError):
        resolver.entity_path(ActionKind.delete, Person(id=1, name="x", email="x"))


def test_route_with_wrong_params_is_a_config_error():
    resolver = UrlForRouteResolver(_router(), {"new": "team_people_new"})

    with pytest.raises(TableConfigError):
        resolver.collection_path(ActionKind.new)
