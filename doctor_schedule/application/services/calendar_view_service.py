from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from ...scheduling.calendar_config import CalendarConfig, DEFAULT_CALENDAR_CONFIG
from ...scheduling.overlap import appointments_in_slot, same_calendar_day
from ...scheduling.slots import TimeSlot, day_of, generate_slots
from ..ports.schedule_repo import AppointmentDto, DoctorDto
from .entries import CalendarEntry
from .schedule_query_service import ScheduleQueryService, day_bounds


@dataclass
class SlotRow:
    slot: TimeSlot
    entries: List[CalendarEntry] = field(default_factory=list)


@dataclass
class DaySchedule:
    day: date
    doctor: Optional[DoctorDto]
    appointments: List[AppointmentDto]
    rows: List[SlotRow]


@dataclass
class DayColumn:
    day: date
    appointments: List[AppointmentDto]
    rows: List[SlotRow]


@dataclass
class WeekSchedule:
    week_start: date
    doctor: Optional[DoctorDto]
    appointments: List[AppointmentDto]
    columns: List[DayColumn]

    @property
    def days(self) -> List[date]:
        return [c.day for c in self.columns]

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


def week_start(anchor: Union[date, datetime]) -> date:
    """Monday of the week containing anchor."""
    day = day_of(anchor)
    return day - timedelta(days=day.weekday())


def week_days(start: Union[date, datetime]) -> List[date]:
    first = day_of(start)
    return [first + timedelta(days=i) for i in range(7)]


@dataclass
class CalendarViewService:
    queries: ScheduleQueryService
    config: CalendarConfig = DEFAULT_CALENDAR_CONFIG

    def _rows(self, day: date, appointments: List[AppointmentDto]) -> List[SlotRow]:
        rows = []
        for slot in generate_slots(day, self.config):
            matched = appointments_in_slot(appointments, slot)
            rows.append(SlotRow(slot=slot, entries=[self.queries.resolve(a) for a in matched]))
        return rows

    def day_view(self, doctor_id: str, day: Union[date, datetime]) -> DaySchedule:
        day = day_of(day)
        appointments = self.queries.by_doctor_and_date(doctor_id, day)
        return DaySchedule(
            day=day,
            doctor=self.queries.doctor_by_id(doctor_id),
            appointments=appointments,
            rows=self._rows(day, appointments),
        )

    def week_view(self, doctor_id: str, anchor: Union[date, datetime]) -> WeekSchedule:
        days = week_days(week_start(anchor))
        range_start, _ = day_bounds(days[0])
        _, range_end = day_bounds(days[-1])
        appointments = self.queries.by_doctor_and_date_range(doctor_id, range_start, range_end)

        columns = []
        for day in days:
            day_appointments = [a for a in appointments if same_calendar_day(a.start_time, day)]
            columns.append(DayColumn(day=day, appointments=day_appointments, rows=self._rows(day, day_appointments)))

        return WeekSchedule(
            week_start=days[0],
            doctor=self.queries.doctor_by_id(doctor_id),
            appointments=appointments,
            columns=columns,
        )
