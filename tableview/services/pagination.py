"""Pagination window calculation.

The pager always shows the first and the last page plus every page within
``settings.pagination_window`` of the current one. A run of two or more
skipped pages collapses into a single ellipsis; a single skipped page is
shown as its number.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tableview.config import settings
from tableview.services.table_state import PageState


class ControlKind(enum.Enum):
    previous = "previous"
    next = "next"
    page = "page"
    ellipsis = "ellipsis"


ELLIPSIS_LABEL = "...."


@dataclass(frozen=True)
class PageControl:
    kind: ControlKind
    label: str
    enabled: bool = True
    current: bool = False
    # Page requested when the control is clicked; None when inert.
    target: int | None = None


@dataclass(frozen=True)
class PaginationWindow:
    total_pages: int
    controls: tuple[PageControl, ...]


def page_numbers(
    total_pages: int, current_page: int, window: int | None = None
) -> list[int | None]:
    """Numbers to show for ``current_page``; ``None`` marks an ellipsis gap."""
    if total_pages <= 0:
        return [1]
    width = settings.pagination_window if window is None else window
    current = min(max(current_page, 1), total_pages)
    shown = {1, total_pages}
    shown.update(range(max(1, current - width), min(total_pages, current + width) + 1))

    result: list[int | None] = []
    previous = 0
    for number in sorted(shown):
        gap = number - previous - 1
        if gap == 1:
            result.append(previous + 1)
        elif gap > 1:
            result.append(None)
        result.append(number)
        previous = number
    return result


def _number_control(number: int, current_page: int) -> PageControl:
    if number == current_page:
        return PageControl(kind=ControlKind.page, label=str(number), current=True)
    return PageControl(kind=ControlKind.page, label=str(number), target=number)


def compute_window(page: PageState, window: int | None = None) -> PaginationWindow:
    total_pages = page.total_pages
    current = page.current_page

    if total_pages == 0:
        only = PageControl(kind=ControlKind.page, label="1", current=True)
        return PaginationWindow(total_pages=0, controls=(only,))

    controls: list[PageControl] = []
    if current <= 1:
        controls.append(PageControl(kind=ControlKind.previous, label="Previous", enabled=False))
    else:
        controls.append(
            PageControl(
                kind=ControlKind.previous,
                label="Previous",
                target=min(current - 1, total_pages),
            )
        )

    for number in page_numbers(total_pages, current, window):
        if number is None:
            controls.append(
                PageControl(kind=ControlKind.ellipsis, label=ELLIPSIS_LABEL, enabled=False)
            )
        else:
            controls.append(_number_control(number, current))

    if current >= total_pages:
        controls.append(PageControl(kind=ControlKind.next, label="Next", enabled=False))
    else:
        controls.append(PageControl(kind=ControlKind.next, label="Next", target=current + 1))

    return PaginationWindow(total_pages=total_pages, controls=tuple(controls))
