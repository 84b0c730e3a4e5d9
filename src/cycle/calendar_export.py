"""iCalendar export of a cycle prediction.

Produces three all-day events (period start, ovulation, fertile window) that
calendar apps can subscribe to or import.  Dates are timezone-naive calendar
days; only DTSTAMP carries a time.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from src.cycle.records import CyclePrediction

PRODID = "-//Cycle Tracker//NONSGML v1.0//EN"
CRLF = "\r\n"


def format_ics_date(value: date) -> str:
    """Format a calendar day as ``YYYYMMDD``."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_ics_stamp(now: datetime) -> str:
    """Format an instant as ``YYYYMMDDTHHMMSSZ``.

    Aware datetimes are converted to UTC; naive ones are taken as UTC.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{format_ics_date(now)}T{now.hour:02d}{now.minute:02d}{now.second:02d}Z"


def _event(
    uid: str,
    stamp: str,
    start: date,
    summary: str,
    description: str,
    category: str,
    end: date | None = None,
) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{stamp}",
        f"DTSTART;VALUE=DATE:{format_ics_date(start)}",
    ]
    if end is not None:
        lines.append(f"DTEND;VALUE=DATE:{format_ics_date(end)}")
    lines += [
        f"SUMMARY:{summary}",
        f"DESCRIPTION:{description}",
        f"CATEGORIES:{category}",
        "END:VEVENT",
    ]
    return lines


def export_ics(prediction: CyclePrediction, user_id: str, now: datetime) -> str:
    """Serialize a prediction as an iCalendar document.

    Args:
        prediction: The dates to export.
        user_id:    Prefix for every event UID, keeping UIDs stable per user
                    and date so re-imports update rather than duplicate.
        now:        Export instant, written to every event's DTSTAMP.

    Returns:
        CRLF-joined VCALENDAR text with exactly three VEVENTs, in the order
        period, ovulation, fertile window.
    """
    stamp = format_ics_stamp(now)
    period = prediction.next_period_date
    ovulation = prediction.next_ovulation_date
    fertile_start = prediction.fertile_window_start

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
    ]
    lines += _event(
        uid=f"{user_id}-period-{format_ics_date(period)}",
        stamp=stamp,
        start=period,
        summary="Period start",
        description="Expected start of menstruation based on your cycle tracking",
        category="MENSTRUATION",
    )
    lines += _event(
        uid=f"{user_id}-ovulation-{format_ics_date(ovulation)}",
        stamp=stamp,
        start=ovulation,
        summary="Ovulation",
        description="Expected ovulation - most fertile day",
        category="OVULATION",
    )
    lines += _event(
        uid=f"{user_id}-fertile-start-{format_ics_date(fertile_start)}",
        stamp=stamp,
        start=fertile_start,
        end=prediction.fertile_window_end,
        summary="Fertile window",
        description="Fertile window - increased chance of pregnancy",
        category="FERTILE",
    )
    lines.append("END:VCALENDAR")
    return CRLF.join(lines)
