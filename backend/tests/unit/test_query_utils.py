"""Unit tests for the in-memory query utilities."""

import json

import pytest

from tenant_admin.application import query_utils as q


@pytest.fixture
def items() -> list[dict]:
    return [
        {"id": "A", "name": "beta", "score": 10, "created": {"when": "2024-03-01T00:00:00.000Z", "by": "ann"}},
        {"id": "B", "name": "Alpha", "score": 2, "created": {"when": "2024-01-01T00:00:00.000Z", "by": "bob"}},
        {"id": "C", "name": "gamma", "created": {"when": "2024-02-01T00:00:00.000Z", "by": "ann"}},
    ]


# ── Paths ────────────────────────────────────────────────────────────


def test_get_path_resolves_nested_and_missing():
    item = {"a": {"b": {"c": 1}}, "x": 5}
    assert q.get_path(item, "a.b.c") == 1
    assert q.get_path(item, "a.z.c") is None
    assert q.get_path(item, "x.y") is None


def test_deep_merge_merges_maps_and_replaces_lists():
    base = {"contact": {"email": "a@b.co", "phone": "0123456789"}, "items": [1, 2]}
    merged = q.deep_merge(base, {"contact": {"email": "c@d.co"}, "items": [3]})
    assert merged == {"contact": {"email": "c@d.co", "phone": "0123456789"}, "items": [3]}
    assert base["contact"]["email"] == "a@b.co"


# ── Pagination ───────────────────────────────────────────────────────


def test_paginate_concatenated_pages_reproduce_input():
    data = [{"id": i} for i in range(7)]
    pages = q.paginate(data, 1, 3).pagination["pages"]
    rebuilt = [row for p in range(1, pages + 1) for row in q.paginate(data, p, 3).data]
    assert rebuilt == data
    assert pages == 3


def test_paginate_past_the_end_keeps_totals():
    page = q.paginate([{"id": 1}, {"id": 2}], page=5, limit=1)
    assert page.data == []
    assert page.pagination["total"] == 2
    assert page.pagination["pages"] == 2
    assert page.pagination["hasNext"] is False
    assert page.pagination["hasPrev"] is True


def test_paginate_clamps_bad_values_and_empty_input():
    page = q.paginate([], page=0, limit="nope")
    assert page.pagination == {
        "page": 1,
        "limit": 1,
        "total": 0,
        "pages": 1,
        "hasNext": False,
        "hasPrev": False,
    }


# ── Sorting ──────────────────────────────────────────────────────────


def test_sort_strings_case_insensitive(items):
    assert [i["name"] for i in q.sort_items(items, "name")] == ["Alpha", "beta", "gamma"]


def test_sort_missing_values_first_and_desc_reverses(items):
    asc = [i["id"] for i in q.sort_items(items, "score", "ASC")]
    assert asc == ["C", "B", "A"]
    assert [i["id"] for i in q.sort_items(items, "score", "desc")] == list(reversed(asc))


def test_sort_iso_dates_chronologically(items):
    assert [i["id"] for i in q.sort_items(items, "created.when")] == ["B", "C", "A"]


def test_sort_unknown_direction_is_ascending_and_empty_field_keeps_order(items):
    assert q.sort_items(items, "name", "sideways") == q.sort_items(items, "name", "asc")
    assert q.sort_items(items, "", "desc") == items


def test_sort_is_stable_for_ties():
    rows = [{"k": 1, "id": "x"}, {"k": 1, "id": "y"}, {"k": 0, "id": "z"}]
    assert [r["id"] for r in q.sort_items(rows, "k")] == ["z", "x", "y"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sort_is_idempotent_with_missing_values_and_ties(items, direction):
    rows = items + [{"id": "D", "score": 2}, {"id": "E"}]
    once = q.sort_items(rows, "score", direction)
    assert q.sort_items(once, "score", direction) == once
    assert [r["id"] for r in once] == (["C", "E", "B", "D", "A"] if direction == "asc" else ["A", "B", "D", "C", "E"])


# ── Search and filters ───────────────────────────────────────────────


def test_search_empty_term_is_noop(items):
    assert q.search_items(items, "", ["name"]) == items
    assert q.search_items(items, None, ["name"]) == items


def test_search_is_case_insensitive_over_dotted_fields(items):
    upper = q.search_items(items, "ANN", ["created.by"])
    lower = q.search_items(items, "ann", ["created.by"])
    assert upper == lower
    assert [i["id"] for i in upper] == ["A", "C"]


def test_search_matches_lists_and_booleans():
    rows = [{"items": ["Fire", "Flood"], "active": True}, {"items": ["Crime"], "active": False}]
    assert len(q.search_items(rows, "flood", ["items"])) == 1
    assert len(q.search_items(rows, "true", ["active"])) == 1


def test_filter_contains_and_flag():
    rows = [
        {"category": "Emergency Types", "active": True},
        {"category": "Languages", "active": False},
        {"active": True},
    ]
    assert q.filter_contains(rows, "category", "emerg") == [rows[0]]
    assert q.filter_flag(rows, "active", "false") == [rows[1]]
    assert q.filter_flag(rows, "active", "true") == [rows[0], rows[2]]


def test_filter_date_range_bounds_are_exclusive(items):
    kept = q.filter_date_range(items, "created.when", after="2024-01-01T00:00:00Z", before="2024-03-01")
    assert [i["id"] for i in kept] == ["C"]
    assert q.filter_date_range(items, "created.when", after="not a date") == items


# ── Export ───────────────────────────────────────────────────────────


def test_csv_header_uses_leaf_names_and_escapes_values():
    rows = [{"id": "1", "name": 'He said "hi", twice', "created": {"when": "2024-01-01"}}]
    text = q.export_items(rows, "csv", ["id", "name", "created.when", "missing.path"])
    lines = text.splitlines()
    assert lines[0] == "id,name,when,path"
    assert lines[1] == '1,"He said ""hi"", twice",2024-01-01,'


def test_csv_header_disambiguates_clashing_leaves():
    rows = [{"created": {"when": "a"}, "updated": {"when": "b"}}]
    header = q.export_items(rows, "csv", ["created.when", "updated.when"]).splitlines()[0]
    assert header == "created.when,updated.when"


def test_json_export_is_pretty_printed_and_unknown_format_falls_back(items):
    text = q.export_items(items, "xml")
    assert json.loads(text) == items
    assert text.startswith("[\n  {")


def test_csv_round_trips_with_json_projection():
    rows = [
        {"id": "L1", "category": "Fruit, dried", "items": ["fig", "date"], "created": {"when": "2024-01-01"}},
        {"id": "L2", "category": 'Quote "q"', "items": ["x"], "created": {"when": "2024-01-02"}},
    ]
    fields = ["id", "category", "items", "created.when"]
    parsed = q.parse_csv(q.export_items(rows, "csv", fields))
    projected = json.loads(q.export_items(rows, "json", fields))
    for from_csv, from_json in zip(parsed, projected):
        assert from_csv["id"] == from_json["id"]
        assert from_csv["category"] == from_json["category"]
        assert from_csv["items"] == ",".join(from_json["items"])
        assert from_csv["when"] == from_json["created"]["when"]


# ── Stats ────────────────────────────────────────────────────────────


def test_aggregate_stats_counts_sum_to_total():
    rows = [{"g": "a"}, {"g": "b"}, {"g": "a"}, {}]
    stats = q.aggregate_stats(rows, ["g"])
    assert stats["total"] == 4
    assert stats["counts"]["g"] == {"a": 2, "b": 1, "unset": 1}
    assert sum(stats["counts"]["g"].values()) == stats["total"]


def test_distinct_values_keeps_first_seen_order():
    rows = [{"c": "x"}, {"c": "y"}, {"c": "x"}, {"c": None}]
    assert q.distinct_values(rows, "c") == ["x", "y"]
