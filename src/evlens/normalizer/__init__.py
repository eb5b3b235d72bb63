"""Normalization layer for security event results.

Provides:
- EligibilityClassifier: decides whether a result set gets the security
  event view and which rows are high-value
- RecordNormalizer: projects one row onto the canonical forensic fields
"""

from evlens.normalizer.aliases import CANONICAL_FIELDS, EVENT_ID, FieldResolver, resolve_event_id
from evlens.normalizer.eligibility import (
    EligibilityClassifier,
    filter_high_value,
    is_high_value,
    is_specialized_view,
)
from evlens.normalizer.record import (
    SEVERITY_MARKERS,
    UNKNOWN_EVENT,
    RecordNormalizer,
    normalize,
    truncate,
)

__all__ = [
    "CANONICAL_FIELDS",
    "EVENT_ID",
    "FieldResolver",
    "resolve_event_id",
    "EligibilityClassifier",
    "filter_high_value",
    "is_high_value",
    "is_specialized_view",
    "SEVERITY_MARKERS",
    "UNKNOWN_EVENT",
    "RecordNormalizer",
    "normalize",
    "truncate",
]
