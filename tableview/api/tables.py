import logging
from time import monotonic

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from tableview.csrf import get_csrf_token, require_csrf, set_csrf_cookie
from tableview.metrics import TABLE_EVENT_COUNT, observe_render
from tableview.rendering import render_html
from tableview.schemas.table_view import (
    TableColumnState,
    TableEventRequest,
    TableEventResponse,
    TableQueryParams,
    TableStateResponse,
)
from tableview.services.formatting import DefaultFormatter
from tableview.services.table_config import TableRegistry, TableViewService
from tableview.services.table_events import apply_event
from tableview.services.table_view import build_table

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tables", tags=["tables"])


def table_query_params(request: Request) -> TableQueryParams:
    try:
        return TableQueryParams.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.get("/{table_key}", response_class=HTMLResponse)
def get_table(
    table_key: str,
    request: Request,
    params: TableQueryParams = Depends(table_query_params),
):
    definition = TableRegistry.get(table_key)
    csrf_token = get_csrf_token(request)

    started = monotonic()
    html = TableViewService.render_html(definition.table_key, params, csrf_token=csrf_token)
    observe_render(table_key, monotonic() - started)

    response = HTMLResponse(content=html)
    if request.cookies.get("csrf_token") != csrf_token:
        set_csrf_cookie(response, csrf_token, request)
    return response


@router.get("/{table_key}/state", response_model=TableStateResponse)
def get_table_state(
    table_key: str,
    params: TableQueryParams = Depends(table_query_params),
):
    definition = TableRegistry.get(table_key)
    state = TableViewService.build_state(definition, params)
    state = TableViewService.fetch(definition, state)
    formatter = definition.config.formatter or DefaultFormatter()

    return TableStateResponse(
        table_key=table_key,
        columns=[
            TableColumnState(
                key=spec.key,
                label=formatter.header_label(spec),
                sortable=spec.sortable,
                searchable=spec.searchable,
                is_visible=not spec.hidden,
            )
            for spec in state.fields
        ],
        state=TableViewService.to_params(state, parent=params.parent),
        count=state.page.total_count,
        total_pages=state.page.total_pages,
    )


@router.post("/{table_key}/events", response_model=TableEventResponse)
def post_table_event(
    table_key: str,
    payload: TableEventRequest,
    csrf_token: str = Depends(require_csrf),
):
    definition = TableRegistry.get(table_key)

    started = monotonic()
    state = TableViewService.build_state(definition, payload, csrf_token=csrf_token)
    # Counts matter for page clamping, so fetch before applying the event.
    state = TableViewService.fetch(definition, state)
    state = apply_event(state, payload.event, payload.value)
    state = TableViewService.fetch(definition, state)
    html = str(render_html(build_table(state)))
    observe_render(table_key, monotonic() - started)
    TABLE_EVENT_COUNT.labels(table_key=table_key, event=payload.event).inc()

    logger.info("Table %s handled %s event", table_key, payload.event)
    return TableEventResponse(
        table_key=table_key,
        state=TableViewService.to_params(state, parent=payload.parent),
        html=html,
    )
