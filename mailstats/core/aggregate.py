from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mailstats.core.types import Totals

TIME_FIELD = "time"
FAILED_FIELD = "failed"
FAILED_SUBCATEGORIES = ("temporary", "permanent")


def merge_counts(current: Mapping[str, Any] | None, counts: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``current`` with ``counts`` added per sub-key.

    Existing integers are summed and missing keys are set. An existing value
    that is not an integer is left as it is.
    """
    merged = dict(current or {})
    for key, value in (counts or {}).items():
        existing = merged.get(key)
        if key not in merged:
            merged[key] = value
        elif isinstance(existing, int) and not isinstance(existing, bool):
            merged[key] = existing + value
    return merged


def aggregate_totals(records: Iterable[Mapping[str, Any]]) -> Totals:
    """Fold Mailgun's time-bucketed stats into per-category totals.

    The nested ``failed`` category is split into top-level ``temporary`` and
    ``permanent`` categories.
    """
    totals: Totals = {}
    for record in records:
        for key, value in record.items():
            if key == TIME_FIELD:
                continue
            if key == FAILED_FIELD:
                failed = value or {}
                for sub in FAILED_SUBCATEGORIES:
                    totals[sub] = merge_counts(totals.get(sub), failed.get(sub))
            else:
                totals[key] = merge_counts(totals.get(key), value)
    return totals
