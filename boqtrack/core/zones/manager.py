"""Zone roll-ups for the zone dashboard.

A zone is the spatial tag on an activity.  Each zone's progress is its
summed actual units over its summed planned units, rounded to two
decimals.  Status, priority, color and ranking all read that rounded
figure, and all but ranking can be overridden per zone by an explicit
:class:`ZoneMapping`.  Unlike activity forecasting, zone progress
is not capped, so a zone that overshoots its plan reports more than 100%.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from boqtrack.common.enums import ZonePriority, ZoneStatus
from boqtrack.common.logging import get_logger
from boqtrack.common.parsing import clean_text
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord
from boqtrack.core.zones.display import DEFAULT_ZONE_COLOR, format_zone_name, progress_color
from boqtrack.core.zones.schemas import (
    ZoneAnalytics,
    ZoneComparison,
    ZoneInfo,
    ZoneMapping,
    ZonePerformanceSummary,
)

logger = get_logger("zones.manager")

UNASSIGNED_ZONE = "0"

LOW_PROGRESS_THRESHOLD = 25.0
BUSY_ZONE_ACTIVITY_COUNT = 3
BUSY_ZONE_PROGRESS_THRESHOLD = 50.0


def zone_status_for(progress: float) -> ZoneStatus:
    if progress >= 100:
        return ZoneStatus.COMPLETED
    if progress > 0:
        return ZoneStatus.ACTIVE
    return ZoneStatus.PENDING


def zone_priority_for(progress: float, activity_count: int) -> ZonePriority:
    if progress < 20 and activity_count > 5:
        return ZonePriority.HIGH
    if progress > 80:
        return ZonePriority.LOW
    return ZonePriority.MEDIUM


class ZoneManager:
    def __init__(
        self,
        activities: Iterable[Activity],
        records: Iterable[ProgressRecord] = (),
        zone_mappings: Iterable[ZoneMapping] = (),
    ):
        self.activities = tuple(activities)
        self.records = tuple(records)
        self._mappings: dict[str, ZoneMapping] = {}
        for mapping in zone_mappings:
            self._mappings.setdefault(mapping.zone_number, mapping)

    def unique_zones(self) -> list[str]:
        zones = {
            a.zone_number
            for a in self.activities
            if a.zone_number and a.zone_number != UNASSIGNED_ZONE
        }
        return sorted(zones)

    def activities_by_zone(self, zone_number: str) -> list[Activity]:
        zone_number = clean_text(zone_number)
        return [a for a in self.activities if a.zone_number == zone_number]

    def records_by_zone(self, zone_number: str) -> list[ProgressRecord]:
        key = clean_text(zone_number).lower()
        return [r for r in self.records if r.zone.lower() == key]

    def zone_mapping(self, zone_number: str) -> ZoneMapping | None:
        return self._mappings.get(clean_text(zone_number))

    def zone_info(self, zone_number: str) -> ZoneInfo | None:
        zone_number = clean_text(zone_number)
        zone_activities = self.activities_by_zone(zone_number)
        if not zone_activities:
            return None

        total_planned = sum(a.planned_units for a in zone_activities)
        total_actual = sum(a.actual_units for a in zone_activities)
        progress = round(total_actual / total_planned * 100, 2) if total_planned > 0 else 0.0

        info = ZoneInfo(
            zone_number=zone_number,
            activities_count=len(zone_activities),
            records_count=len(self.records_by_zone(zone_number)),
            total_planned_units=total_planned,
            total_actual_units=total_actual,
            progress_percentage=progress,
            zone_name=format_zone_name(zone_number),
            zone_status=zone_status_for(progress),
            zone_priority=zone_priority_for(progress, len(zone_activities)),
            zone_color=progress_color(progress),
        )

        mapping = self.zone_mapping(zone_number)
        if mapping is None:
            return info

        overrides = {
            field: value
            for field, value in mapping.model_dump(
                include={"zone_name", "zone_description", "zone_color", "zone_priority", "zone_status"}
            ).items()
            if value is not None
        }
        return info.model_copy(update=overrides)

    def analytics(self) -> ZoneAnalytics:
        infos = (self.zone_info(zone) for zone in self.unique_zones())
        zones = [info for info in infos if info is not None]

        average = sum(z.progress_percentage for z in zones) / len(zones) if zones else 0.0
        ranked = sorted(zones, key=lambda z: z.progress_percentage, reverse=True)
        comparison = [
            ZoneComparison(zone=z.zone_number, performance=z.progress_percentage, rank=index)
            for index, z in enumerate(ranked, start=1)
        ]

        logger.debug("Computed analytics for %d zones", len(zones))
        return ZoneAnalytics(
            total_zones=len(zones),
            active_zones=sum(1 for z in zones if z.zone_status == ZoneStatus.ACTIVE),
            completed_zones=sum(1 for z in zones if z.zone_status == ZoneStatus.COMPLETED),
            average_progress=round(average, 2),
            zone_performance=zones,
            zone_comparison=comparison,
            zone_recommendations=generate_recommendations(zones),
        )

    def zones_by_status(self, status: ZoneStatus | str) -> list[ZoneInfo]:
        status = ZoneStatus(status)
        return [z for z in self.analytics().zone_performance if z.zone_status == status]

    def zones_by_priority(self, priority: ZonePriority | str) -> list[ZoneInfo]:
        priority = ZonePriority(priority)
        return [z for z in self.analytics().zone_performance if z.zone_priority == priority]

    def performance_summary(self) -> ZonePerformanceSummary:
        analytics = self.analytics()
        zones = analytics.zone_performance
        if not zones:
            return ZonePerformanceSummary(
                best_performing=None,
                worst_performing=None,
                average_progress=0.0,
                total_activities=0,
                completion_rate=0.0,
            )

        ranked = sorted(zones, key=lambda z: z.progress_percentage, reverse=True)
        return ZonePerformanceSummary(
            best_performing=ranked[0],
            worst_performing=ranked[-1],
            average_progress=analytics.average_progress,
            total_activities=sum(z.activities_count for z in zones),
            completion_rate=round(analytics.completed_zones / len(zones) * 100, 2),
        )

    def create_zone_mapping(self, zone_number: str, **fields) -> ZoneMapping:
        """Complete a partial mapping with the defaults used for new zones."""
        zone_number = clean_text(zone_number) or UNASSIGNED_ZONE
        now = datetime.now(timezone.utc)
        return ZoneMapping(
            zone_number=zone_number,
            zone_name=fields.get("zone_name") or format_zone_name(zone_number),
            zone_description=fields.get("zone_description") or "",
            zone_color=fields.get("zone_color") or DEFAULT_ZONE_COLOR,
            zone_priority=fields.get("zone_priority") or ZonePriority.MEDIUM,
            zone_status=fields.get("zone_status") or ZoneStatus.PENDING,
            created_at=fields.get("created_at") or now,
            updated_at=now,
        )


def generate_recommendations(zones: list[ZoneInfo]) -> list[str]:
    recommendations: list[str] = []

    low_progress = [z for z in zones if z.progress_percentage < LOW_PROGRESS_THRESHOLD]
    if low_progress:
        recommendations.append(
            f"Focus on {len(low_progress)} zones with low progress: "
            f"{', '.join(z.zone_number for z in low_progress)}"
        )

    busy_and_behind = [
        z
        for z in zones
        if z.activities_count > BUSY_ZONE_ACTIVITY_COUNT
        and z.progress_percentage < BUSY_ZONE_PROGRESS_THRESHOLD
    ]
    if busy_and_behind:
        recommendations.append(
            "Review resource allocation for zones with many activities but low progress: "
            f"{', '.join(z.zone_number for z in busy_and_behind)}"
        )

    completed = [z for z in zones if z.zone_status == ZoneStatus.COMPLETED]
    if completed:
        recommendations.append(
            f"Celebrate completion of {len(completed)} zones: "
            f"{', '.join(z.zone_number for z in completed)}"
        )

    return recommendations
