from __future__ import annotations

import enum

from tableview.services.table_state import SortDirection, SortSpec


class SortIndicator(enum.Enum):
    ascending = "ascending-active"
    descending = "descending-active"
    neutral = "neutral"


INDICATOR_TEXT = {
    SortIndicator.ascending: "sort ▼",
    SortIndicator.descending: "sort ▲",
    SortIndicator.neutral: "sort",
}


def next_sort(current: SortSpec | None, clicked_key: str) -> SortSpec:
    """Sort to request after a click on ``clicked_key``'s header.

    Clicking the active column flips its direction, any other click starts
    ascending on the clicked column.
    """
    if current is not None and current.key == clicked_key:
        if current.direction is SortDirection.asc:
            return SortSpec.desc(clicked_key)
        return SortSpec.asc(clicked_key)
    return SortSpec.asc(clicked_key)


def indicator_for(key: str, current: SortSpec | None) -> SortIndicator:
    if current is None or current.key != key:
        return SortIndicator.neutral
    if current.direction is SortDirection.asc:
        return SortIndicator.ascending
    return SortIndicator.descending
