"""Prometheus metrics for the change tracker."""

from __future__ import annotations

from prometheus_client import Counter

records_total = Counter(
    "change_tracker_records_total",
    "Change records emitted by the extractor",
    ["op"],
)

formatter_fallbacks_total = Counter(
    "change_tracker_formatter_fallbacks_total",
    "Custom formatters that raised and were replaced by the default stringifier",
)

metadata_lookups_total = Counter(
    "change_tracker_metadata_lookups_total",
    "Metadata resolver lookups",
    ["kind", "result"],
)
