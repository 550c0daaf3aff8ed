"""Decide whether a progress record reports against a given activity.

Matching runs in two stages and stops at the first failure:

1. **Project identity.**  When the activity's full code carries a sub-code
   (contains ``-``) the record's full code must equal it exactly; there is
   no fallback to the bare project code, so progress never bleeds across
   sub-projects.  Without a sub-code, any pairing of code / full code on
   either side may match.
2. **Activity name.**  Handled by a pluggable name predicate.  The default,
   :func:`activity_names_match`, accepts equality or containment in either
   direction to absorb free-text drift in data entry.

Zones are deliberately not compared: productivity is aggregated across
zones so that sparse activities still get enough data points.
"""

from __future__ import annotations

from collections.abc import Callable

from boqtrack.common.parsing import clean_text
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord

NameMatcher = Callable[[str, str], bool]

SUB_CODE_SEPARATOR = "-"


def activity_names_match(record_name: str, activity_name: str) -> bool:
    record_name = clean_text(record_name).lower()
    activity_name = clean_text(activity_name).lower()
    if not record_name or not activity_name:
        return False
    return (
        record_name == activity_name
        or activity_name in record_name
        or record_name in activity_name
    )


def activity_names_equal(record_name: str, activity_name: str) -> bool:
    """Strict alternative to :func:`activity_names_match`."""
    record_name = clean_text(record_name).lower()
    return bool(record_name) and record_name == clean_text(activity_name).lower()


def project_codes_match(record: ProgressRecord, activity: Activity) -> bool:
    activity_full = activity.full_code
    record_full = record.full_code

    if SUB_CODE_SEPARATOR in activity_full:
        return bool(record_full) and record_full == activity_full

    record_codes = {c for c in (clean_text(record.project_code).upper(), record_full) if c}
    activity_codes = {c for c in (clean_text(activity.project_code).upper(), activity_full) if c}
    return not record_codes.isdisjoint(activity_codes)


def kpi_matches_activity(
    record: ProgressRecord,
    activity: Activity,
    name_matcher: NameMatcher = activity_names_match,
) -> bool:
    if not project_codes_match(record, activity):
        return False
    return name_matcher(record.activity_name, activity.activity_name)
