"""
Overlap Matching

Decides which appointments belong to a slot or a date range. Boundaries
are inclusive on both ends: an appointment ending exactly when a slot
starts (or starting exactly when it ends) still matches that slot, so it
can show up in two adjacent slots.
"""

from datetime import date, datetime
from typing import List, Sequence, Union

from ..application.ports.schedule_repo import AppointmentDto
from .slots import TimeSlot


def overlaps(appointment: AppointmentDto, window_start: datetime, window_end: datetime) -> bool:
    start = appointment.start_time
    end = appointment.end_time
    return (
        window_start <= start <= window_end
        or window_start <= end <= window_end
        or (start <= window_start and end >= window_end)
    )


def overlaps_slot(appointment: AppointmentDto, slot: TimeSlot) -> bool:
    return overlaps(appointment, slot.start, slot.end)


def appointments_in_slot(appointments: Sequence[AppointmentDto], slot: TimeSlot) -> List[AppointmentDto]:
    return [a for a in appointments if overlaps_slot(a, slot)]


def same_calendar_day(moment: Union[date, datetime], day: Union[date, datetime]) -> bool:
    """Compare date components only, ignoring time of day."""
    if isinstance(moment, datetime):
        moment = moment.date()
    if isinstance(day, datetime):
        day = day.date()
    return moment == day
