# Services package (re-export feature modules for stable imports)
from .entries import BareAppointment, PopulatedAppointment, CalendarEntry, patient_label
from .schedule_query_service import ScheduleQueryService, sort_by_start
from .calendar_view_service import CalendarViewService, DaySchedule, WeekSchedule, week_start, week_days

__all__ = [
    "BareAppointment",
    "PopulatedAppointment",
    "CalendarEntry",
    "patient_label",
    "ScheduleQueryService",
    "sort_by_start",
    "CalendarViewService",
    "DaySchedule",
    "WeekSchedule",
    "week_start",
    "week_days",
]
