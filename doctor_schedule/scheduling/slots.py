"""
Time Slot Generation

Splits the configured daily window (start hour to end hour) into
fixed-width slots. Slots are the rows of the day view and the rows of
every column in the week view.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Union

from .calendar_config import CalendarConfig, DEFAULT_CALENDAR_CONFIG


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime
    label: str


def day_of(anchor: Union[date, datetime]) -> date:
    if isinstance(anchor, datetime):
        return anchor.date()
    return anchor


def local_wall_clock(value: datetime) -> datetime:
    """Naive local time; values carrying an offset are converted first."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def generate_slots(
    anchor: Union[date, datetime],
    config: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
) -> List[TimeSlot]:
    """
    Generate the ordered slots covering the calendar window of a day.

    Args:
        anchor: any date or datetime; only its calendar day is used
        config: calendar window and slot duration

    Returns:
        list[TimeSlot] ascending and contiguous. With the default config
        (8-18, 30 minutes) this is 20 slots, 8:00 AM through 5:30 PM.

    The loop stops once the hour of the running clock reaches
    config.end_hour. A duration that does not divide the window evenly
    leaves a last slot ending past end_hour (45 minutes over 8-18 ends
    with 17:45-18:30). With end_hour == 24 the loop stops at midnight.
    """
    day = day_of(anchor)
    step = timedelta(minutes=config.slot_duration_minutes)
    current = datetime.combine(day, time(config.start_hour))

    slots = []
    while current.date() == day and current.hour < config.end_hour:
        slot_end = current + step
        slots.append(TimeSlot(start=current, end=slot_end, label=config.format_label(current)))
        current = slot_end

    return slots
