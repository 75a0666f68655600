from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TableQueryParams(BaseModel):
    """Interaction state of a table as carried in request parameters."""

    page: int = Field(default=1, ge=1)
    per_page: int | None = Field(default=None, ge=1)
    sort_by: str | None = None
    sort_dir: Literal["asc", "desc"] = "asc"
    search: str = Field(default="", max_length=200)
    # Comma separated hidden column keys; None keeps the configured defaults.
    hidden: str | None = None
    show_field_buttons: bool = False
    parent: str | None = None

    def hidden_keys(self) -> list[str]:
        if not self.hidden:
            return []
        return [key.strip() for key in self.hidden.split(",") if key.strip()]


class TableEventRequest(TableQueryParams):
    event: str = Field(min_length=1, max_length=40)
    value: str | None = None


class TableEventResponse(BaseModel):
    table_key: str
    state: TableQueryParams
    html: str


class TableColumnState(BaseModel):
    key: str
    label: str
    sortable: bool
    searchable: bool
    is_visible: bool


class TableStateResponse(BaseModel):
    table_key: str
    columns: list[TableColumnState]
    state: TableQueryParams
    count: int
    total_pages: int
