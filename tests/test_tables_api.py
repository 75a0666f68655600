from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tableview.csrf import CSRF_COOKIE_NAME, CSRF_HEADER_NAME
from tableview.main import create_app
from tableview.services.table_config import TableRegistry
from tests.mocks import PEOPLE, Team, list_source


@pytest.fixture()
def client(registered_people_table):
    return TestClient(create_app(), raise_server_exceptions=False)


def _csrf(client: TestClient) -> dict[str, str]:
    client.cookies.set(CSRF_COOKIE_NAME, "tok-abc")
    return {CSRF_HEADER_NAME: "tok-abc"}


def test_get_table_renders_html_and_sets_csrf_cookie(client):
    resp = client.get("/tables/people", params={"sort_by": "name", "sort_dir": "desc"})

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert 'class="tv-outer-wrapper"' in resp.text
    assert "Person 47" in resp.text
    assert CSRF_COOKIE_NAME in resp.cookies


def test_get_table_passes_existing_csrf_token_to_delete_buttons(client):
    client.cookies.set(CSRF_COOKIE_NAME, "tok-xyz")

    resp = client.get("/tables/people")

    assert 'data-csrf="tok-xyz"' in resp.text


def test_unknown_table_is_404(client):
    resp = client.get("/tables/missing")

    assert resp.status_code == 404
    assert resp.json()["code"] == "unknown_table"
    assert resp.json()["request_id"]


def test_invalid_sort_is_400(client):
    resp = client.get("/tables/people", params={"sort_by": "email"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_sort"


def test_invalid_params_are_422(client):
    resp = client.get("/tables/people", params={"page": "0"})

    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


def test_state_endpoint_reports_columns_and_counts(client):
    resp = client.get("/tables/people/state", params={"hidden": "email", "page": "2"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 47
    assert body["total_pages"] == 5
    assert body["state"]["page"] == 2
    visible = {column["key"]: column["is_visible"] for column in body["columns"]}
    assert visible == {"name": True, "email": False, "team_id": True}


def test_event_applies_transition_and_returns_new_state(client):
    resp = client.post(
        "/tables/people/events",
        json={"event": "sort_column", "value": "name", "sort_by": "name", "sort_dir": "asc"},
        headers=_csrf(client),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["state"]["sort_by"] == "name"
    assert body["state"]["sort_dir"] == "desc"
    assert "Person 47" in body["html"]


def test_change_page_event_clamps_to_last_page(client):
    resp = client.post(
        "/tables/people/events",
        json={"event": "change_page", "value": "12"},
        headers=_csrf(client),
    )

    assert resp.status_code == 200
    assert resp.json()["state"]["page"] == 5


def test_event_without_csrf_is_rejected(client):
    resp = client.post("/tables/people/events", json={"event": "show_buttons"})

    assert resp.status_code == 403


def test_unknown_event_is_400(client):
    resp = client.post(
        "/tables/people/events",
        json={"event": "explode"},
        headers=_csrf(client),
    )

    assert resp.status_code == 400
    assert resp.json()["code"] == "unknown_event"


def test_health_and_metrics(client):
    client.get("/tables/people")

    assert client.get("/health").json() == {"status": "ok"}
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "table_renders_total" in metrics.text


def test_parent_on_table_without_loader_is_400(client):
    resp = client.get("/tables/people", params={"parent": "2"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "missing_parent_loader"


def test_unknown_parent_is_404(client, routes):
    TableRegistry.register(
        table_key="team_people",
        fields=[],
        data_source=list_source(PEOPLE),
        action_buttons=["new"],
        routes=routes,
        parent_loader={"2": Team(id=2, name="Blue")}.get,
    )
    try:
        resp = client.get("/tables/team_people", params={"parent": "99"})
    finally:
        TableRegistry.unregister("team_people")

    assert resp.status_code == 404
    assert resp.json()["code"] == "unknown_parent"
