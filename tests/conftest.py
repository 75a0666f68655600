from __future__ import annotations

from typing import Any

import pytest

from tableview.services.table_config import TableRegistry
from tableview.services.table_state import (
    ActionKind,
    FieldSpec,
    PageState,
    TableConfig,
    TableViewState,
)
from tests.mocks import PEOPLE, FakeRoutes, Person, list_source


@pytest.fixture()
def people() -> list[Person]:
    return list(PEOPLE)


@pytest.fixture()
def routes() -> FakeRoutes:
    return FakeRoutes()


@pytest.fixture()
def fields() -> tuple[FieldSpec, ...]:
    return (
        FieldSpec(key="name"),
        FieldSpec(key="email", label="E-mail", sortable=False),
        FieldSpec(key="team_id", label="Team", hidden=True, searchable=False),
    )


@pytest.fixture()
def make_state(fields, routes):
    def _make(
        *,
        config_fields=None,
        action_buttons=(ActionKind.new, ActionKind.show, ActionKind.edit, ActionKind.delete),
        parent_resolver=None,
        **state_kwargs: Any,
    ) -> TableViewState:
        config = TableConfig(
            fields=config_fields if config_fields is not None else fields,
            routes=routes,
            action_buttons=action_buttons,
            per_page=10,
            parent_resolver=parent_resolver,
        )
        state_kwargs.setdefault("page", PageState(current_page=1, per_page=10, total_count=0))
        return TableViewState(config=config, **state_kwargs)

    return _make


@pytest.fixture()
def registered_people_table(routes):
    TableRegistry.register(
        table_key="people",
        fields=[
            FieldSpec(key="name"),
            FieldSpec(key="email", sortable=False),
            FieldSpec(key="team_id", label="Team", hidden=True, searchable=False),
        ],
        data_source=list_source(PEOPLE),
        action_buttons=["new", "show", "edit", "delete"],
        routes=routes,
        per_page=10,
        field_overrides={"email": {"label": "E-mail"}},
    )
    yield TableRegistry.get("people")
    TableRegistry.unregister("people")
