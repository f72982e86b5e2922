"""In-memory query helpers shared by every resource service.

Records arrive as plain ``dict`` documents fetched from the document store.
Pagination, sorting, search, export and statistics all run over that list;
nothing here talks to storage.

Every function is total over well-formed input: odd page numbers, unknown
sort directions or export formats fall back to defaults instead of raising.
"""

import csv
import io
import json
import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

Record = dict[str, Any]

UNSET_BUCKET = "unset"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?)?(Z|[+-]\d{2}:?\d{2})?$")


# ── Field access ─────────────────────────────────────────────────────


def get_path(item: Mapping[str, Any] | None, path: str) -> Any:
    """Resolve a dotted path (``created.by``); ``None`` when any hop is missing."""
    current: Any = item
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def set_path(target: dict[str, Any], path: str, value: Any) -> None:
    """Assign *value* at a dotted path, creating intermediate maps."""
    keys = path.split(".")
    for key in keys[:-1]:
        nested = target.get(key)
        if not isinstance(nested, dict):
            nested = {}
            target[key] = nested
        target = nested
    target[keys[-1]] = value


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Return *base* with *patch* merged in; nested maps merge, everything else replaces."""
    merged = dict(base)
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def stringify(value: Any) -> str:
    """Render a field value as text for search matching and CSV cells."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, Mapping):
        return json.dumps(value, default=str, ensure_ascii=False)
    return str(value)


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (``Z`` suffix allowed); ``None`` when it is not one."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and _ISO_DATE.match(value.strip()):
        try:
            moment = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    # naive values are taken as UTC so every comparison is aware
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


# ── Pagination ───────────────────────────────────────────────────────


@dataclass
class Page:
    """One page of records plus its pagination descriptor."""

    data: list[Record]
    pagination: dict[str, Any] = field(default_factory=dict)


def _positive_int(value: Any, default: int = 1) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, number)


def paginate(items: Sequence[Record], page: Any = 1, limit: Any = 10) -> Page:
    """Slice ``[(page-1)*limit, page*limit)`` out of *items*.

    ``page``/``limit`` below 1 are clamped to 1. A page past the end yields an
    empty slice while the descriptor still reports the true totals.
    """
    page = _positive_int(page)
    limit = _positive_int(limit)
    total = len(items)
    pages = max(1, math.ceil(total / limit))
    start = (page - 1) * limit
    return Page(
        data=list(items[start : start + limit]),
        pagination={
            "page": page,
            "limit": limit,
            "total": total,
            "pages": pages,
            "hasNext": page < pages,
            "hasPrev": page > 1,
        },
    )


# ── Sorting ──────────────────────────────────────────────────────────


def normalize_direction(direction: Any) -> str:
    return "desc" if str(direction or "").strip().lower() == "desc" else "asc"


def _sort_key(value: Any) -> tuple:
    # Missing values rank lowest, then numbers, dates, text, structures.
    if value is None:
        return (0,)
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        moment = parse_datetime(value)
        if moment is not None:
            return (2, moment.timestamp())
        return (3, value.casefold())
    return (4, stringify(value).casefold())


def sort_items(items: Iterable[Record], field: str | None, direction: Any = "asc") -> list[Record]:
    """Stable sort by a dotted field.

    Strings compare case-insensitively, numbers numerically and ISO date
    strings chronologically; missing values sort lowest. An empty field keeps
    the input order.
    """
    items = list(items)
    if not field:
        return items
    return sorted(
        items,
        key=lambda item: _sort_key(get_path(item, field)),
        reverse=normalize_direction(direction) == "desc",
    )


# ── Search ───────────────────────────────────────────────────────────


def search_items(items: Iterable[Record], term: Any, fields: Sequence[str]) -> list[Record]:
    """Keep items where any of *fields* contains *term*, case-insensitively.

    An empty term returns the items unchanged.
    """
    items = list(items)
    needle = stringify(term).strip().casefold()
    if not needle:
        return items
    return [
        item
        for item in items
        if any(needle in stringify(get_path(item, f)).casefold() for f in fields)
    ]


def filter_contains(items: Iterable[Record], path: str, value: Any) -> list[Record]:
    """Case-insensitive substring filter on a single field; missing fields never match."""
    needle = stringify(value).casefold()
    result = []
    for item in items:
        current = get_path(item, path)
        if current is None or current == "":
            continue
        if needle in stringify(current).casefold():
            result.append(item)
    return result


def filter_flag(items: Iterable[Record], path: str, value: Any) -> list[Record]:
    """Keep items whose boolean field equals ``value`` parsed as ``"true"``/anything else."""
    wanted = stringify(value).strip().lower() == "true"
    return [item for item in items if get_path(item, path) is wanted]


def filter_date_range(
    items: Iterable[Record],
    path: str,
    after: Any = None,
    before: Any = None,
) -> list[Record]:
    """Keep items whose date field lies strictly between *after* and *before*.

    Unparseable bounds are ignored; items without a parseable date are dropped
    as soon as a bound is active.
    """
    lower = parse_datetime(after)
    upper = parse_datetime(before)
    items = list(items)
    if lower is None and upper is None:
        return items
    result = []
    for item in items:
        moment = parse_datetime(get_path(item, path))
        if moment is None:
            continue
        if lower is not None and not moment > lower:
            continue
        if upper is not None and not moment < upper:
            continue
        result.append(item)
    return result


# ── Export ───────────────────────────────────────────────────────────


def _column_names(fields: Sequence[str]) -> list[str]:
    leaves = [f.rsplit(".", 1)[-1] for f in fields]
    clashes = {leaf for leaf, count in Counter(leaves).items() if count > 1}
    return [f if leaf in clashes else leaf for f, leaf in zip(fields, leaves)]


def project(item: Mapping[str, Any], fields: Sequence[str]) -> Record:
    """Copy only *fields* (dotted paths) out of *item*, keeping their nesting."""
    selected: Record = {}
    for path in fields:
        value = get_path(item, path)
        if value is not None:
            set_path(selected, path, value)
    return selected


def to_csv(items: Sequence[Mapping[str, Any]], fields: Sequence[str]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(_column_names(fields))
    for item in items:
        writer.writerow([stringify(get_path(item, f)) for f in fields])
    return buffer.getvalue()


def to_json(items: Sequence[Mapping[str, Any]], fields: Sequence[str] | None = None) -> str:
    rows = [project(item, fields) for item in items] if fields else list(items)
    return json.dumps(rows, indent=2, default=str, ensure_ascii=False)


def export_items(
    items: Sequence[Mapping[str, Any]],
    format: Any = "json",
    fields: Sequence[str] | None = None,
) -> str:
    """Serialize *items* as ``csv`` or ``json``; unknown formats fall back to JSON.

    CSV without explicit fields uses the keys of the first item.
    """
    if normalize_format(format) == "csv":
        if not fields:
            fields = list(items[0].keys()) if items else []
        return to_csv(items, fields)
    return to_json(items, fields)


def normalize_format(format: Any) -> str:
    return "csv" if str(format or "").strip().lower() == "csv" else "json"


def parse_csv(text: str) -> list[dict[str, str]]:
    """Read an export produced by ``to_csv`` back into row dicts."""
    return list(csv.DictReader(io.StringIO(text)))


# ── Statistics ───────────────────────────────────────────────────────


def _bucket(value: Any) -> str:
    return UNSET_BUCKET if value is None else stringify(value)


def aggregate_stats(items: Sequence[Mapping[str, Any]], group_fields: Sequence[str]) -> dict[str, Any]:
    """Count items per distinct value of each field; missing values land in ``"unset"``."""
    counts: dict[str, dict[str, int]] = {}
    for path in group_fields:
        counter = Counter(_bucket(get_path(item, path)) for item in items)
        counts[path] = dict(counter)
    return {"total": len(items), "counts": counts}


def distinct_values(items: Iterable[Mapping[str, Any]], path: str) -> list[Any]:
    """Distinct truthy values of a field, in first-seen order."""
    seen: dict[str, Any] = {}
    for item in items:
        value = get_path(item, path)
        if value in (None, "", [], {}):
            continue
        seen.setdefault(stringify(value), value)
    return list(seen.values())
