from __future__ import annotations

from collections import Counter
from typing import Any

_FILTER_FIELDS = {
    "category": "category_id",
    "gender": "gender",
    "tier": "tier",
    "range": "range_km",
    "rating": "min_rating",
    "location": "has_origin",
}


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Searches per subject kind
    kind_counter: Counter[str] = Counter(s.get("kind", "unknown") for s in searches)

    # Top categories
    category_counter: Counter[str] = Counter(
        s["category_id"] for s in searches if s.get("category_id")
    )
    top_categories = [{"id": n, "count": c} for n, c in category_counter.most_common(10)]

    # Filter usage rates
    filter_counts = {name: 0 for name in _FILTER_FIELDS}
    for s in searches:
        for name, field in _FILTER_FIELDS.items():
            value = s.get(field)
            if value is not None and value is not False:
                filter_counts[name] += 1
    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    # Empty result pages
    empty = sum(1 for s in searches if s.get("results_returned") == 0)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "searches_by_kind": dict(kind_counter),
        "top_categories": top_categories,
        "filter_usage": filter_usage,
        "empty_results": empty,
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
    }
