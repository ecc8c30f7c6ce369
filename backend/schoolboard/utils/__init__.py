"""Utility functions for the SchoolBoard backend."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping


def generate_id(prefix: str) -> str:
    """Generate a short prefixed identifier, e.g. ``school_1a2b3c4d``."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def calculate_percentage(obtained: float, total: float) -> float:
    """Percentage of obtained over total, 0.0 when total is zero."""
    if total == 0:
        return 0.0
    return (obtained / total) * 100


def pick_filters(params: Mapping[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only the allowed, non-empty equality filters from ``params``."""
    filters = {}
    for field in allowed:
        value = params.get(field)
        if value:
            filters[field] = value
    return filters
