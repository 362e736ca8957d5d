from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping

# A single year or a year interval, e.g. "1950" or "1950/2000"
EVENT_DATE_RE = re.compile(r"^\d{4}(/\d{4})?$")


def validate_minimal_fields(record: Mapping[str, Any], minimal_fields: Iterable[str]) -> List[str]:
    """Return a list of required fields missing from ``record``."""

    missing = [field for field in minimal_fields if not record.get(field)]
    return missing


def validate_event_date(value: str | None) -> bool:
    """Validate that ``value`` is a year or a ``start/end`` year interval."""

    if not value:
        return True
    if not EVENT_DATE_RE.match(value):
        return False
    if "/" in value:
        start, end = value.split("/")
        return start <= end
    return True
