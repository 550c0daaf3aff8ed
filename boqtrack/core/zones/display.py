"""Colors and labels used by the zone dashboard."""

from boqtrack.common.enums import ZonePriority, ZoneStatus

GREEN = "#10B981"
BLUE = "#3B82F6"
AMBER = "#F59E0B"
RED = "#EF4444"
GRAY = "#6B7280"

DEFAULT_ZONE_COLOR = BLUE

_PRIORITY_COLORS: dict[ZonePriority, str] = {
    ZonePriority.HIGH: RED,
    ZonePriority.MEDIUM: AMBER,
    ZonePriority.LOW: GREEN,
}

_STATUS_COLORS: dict[ZoneStatus, str] = {
    ZoneStatus.ACTIVE: BLUE,
    ZoneStatus.COMPLETED: GREEN,
    ZoneStatus.PENDING: GRAY,
    ZoneStatus.DELAYED: RED,
}


def format_zone_name(zone_number: str) -> str:
    if not zone_number or zone_number == "0":
        return "Unknown Zone"
    if "Zone" in zone_number or "Area" in zone_number:
        return zone_number
    return f"Zone {zone_number}"


def progress_color(progress: float) -> str:
    if progress >= 100:
        return GREEN
    if progress >= 75:
        return BLUE
    if progress >= 50:
        return AMBER
    if progress >= 25:
        return RED
    return GRAY


def progress_label(progress: float) -> str:
    if progress >= 100:
        return "Completed"
    if progress >= 75:
        return "On Track"
    if progress >= 50:
        return "In Progress"
    if progress >= 25:
        return "Started"
    return "Not Started"


def priority_color(priority: ZonePriority | str) -> str:
    try:
        return _PRIORITY_COLORS[ZonePriority(priority)]
    except ValueError:
        return GRAY


def status_color(status: ZoneStatus | str) -> str:
    try:
        return _STATUS_COLORS[ZoneStatus(status)]
    except ValueError:
        return GRAY
