from tableview.services.sorting import INDICATOR_TEXT, SortIndicator, indicator_for, next_sort
from tableview.services.table_state import SortSpec


def test_clicking_same_key_cycles_asc_desc_asc():
    first = next_sort(None, "name")
    second = next_sort(first, "name")
    third = next_sort(second, "name")

    assert first == SortSpec.asc("name")
    assert second == SortSpec.desc("name")
    assert third == SortSpec.asc("name")


def test_clicking_other_key_after_desc_starts_ascending():
    assert next_sort(SortSpec.desc("name"), "email") == SortSpec.asc("email")
    assert next_sort(SortSpec.asc("name"), "email") == SortSpec.asc("email")


def test_indicator_for_active_and_inactive_columns():
    assert indicator_for("name", SortSpec.asc("name")) is SortIndicator.ascending
    assert indicator_for("name", SortSpec.desc("name")) is SortIndicator.descending
    assert indicator_for("email", SortSpec.desc("name")) is SortIndicator.neutral
    assert indicator_for("name", None) is SortIndicator.neutral
    assert SortIndicator.ascending.value == "ascending-active"


def test_indicator_text_points_down_for_ascending():
    assert INDICATOR_TEXT[SortIndicator.ascending] == "sort ▼"
    assert INDICATOR_TEXT[SortIndicator.descending] == "sort ▲"
    assert INDICATOR_TEXT[SortIndicator.neutral] == "sort"
