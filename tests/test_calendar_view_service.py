from datetime import date, datetime

from doctor_schedule.application.ports.schedule_repo import (
    AppointmentDto,
    AppointmentType,
    DoctorDto,
    PatientDto,
)
from doctor_schedule.application.services.calendar_view_service import (
    CalendarViewService,
    week_days,
    week_start,
)
from doctor_schedule.application.services.entries import BareAppointment, PopulatedAppointment
from doctor_schedule.application.services.schedule_query_service import ScheduleQueryService
from doctor_schedule.infrastructure.fixtures.fixture_schedule_repository import FixtureScheduleRepository
from doctor_schedule.scheduling.calendar_config import CalendarConfig
from doctor_schedule.scheduling.slots import generate_slots


def make_appt(id, start, end, doctor_id="D1", patient_id="p1"):
    return AppointmentDto(
        id=id,
        doctor_id=doctor_id,
        patient_id=patient_id,
        type=AppointmentType.CONSULTATION,
        start_time=start,
        end_time=end,
    )


def build_views(appointments, config=None):
    repo = FixtureScheduleRepository(
        doctors=[DoctorDto("D1", "Sarah Chen", "Cardiology"), DoctorDto("D2", "Ana Ruiz", "Pediatrics")],
        patients=[PatientDto("p1", "John Smith"), PatientDto("p2", "Maria Garcia")],
        appointments=appointments,
    )
    queries = ScheduleQueryService(repo=repo)
    if config is None:
        return CalendarViewService(queries=queries)
    return CalendarViewService(queries=queries, config=config)


def scenario_appointments():
    return [
        make_appt("first", datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 9, 30)),
        make_appt("second", datetime(2024, 6, 3, 10), datetime(2024, 6, 3, 11), patient_id="p2"),
        make_appt("wednesday", datetime(2024, 6, 5, 14), datetime(2024, 6, 5, 14, 30)),
        make_appt("other-doctor", datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 9, 30), doctor_id="D2"),
        make_appt("next-week", datetime(2024, 6, 10, 9), datetime(2024, 6, 10, 9, 30)),
    ]


def ids_by_label(rows):
    return {r.slot.label: [e.appointment.id for e in r.entries] for r in rows}


def test_week_start_is_monday():
    assert week_start(date(2024, 6, 3)) == date(2024, 6, 3)
    assert week_start(datetime(2024, 6, 6, 15, 0)) == date(2024, 6, 3)
    assert week_start(date(2024, 6, 9)) == date(2024, 6, 3)
    assert week_start(date(2024, 6, 10)) == date(2024, 6, 10)


def test_week_days_are_seven_consecutive_dates():
    days = week_days(date(2024, 6, 3))
    assert days[0] == date(2024, 6, 3)
    assert days[-1] == date(2024, 6, 9)
    assert len(days) == 7


def test_day_view_places_appointments_in_overlapping_slots():
    views = build_views(scenario_appointments())
    day = views.day_view("D1", date(2024, 6, 3))

    assert day.doctor.name == "Sarah Chen"
    assert [a.id for a in day.appointments] == ["first", "second"]
    assert len(day.rows) == 20

    by_label = ids_by_label(day.rows)
    assert by_label["8:00 AM"] == []
    assert by_label["8:30 AM"] == ["first"]
    assert by_label["9:00 AM"] == ["first"]
    assert by_label["9:30 AM"] == ["first", "second"]
    assert by_label["10:00 AM"] == ["second"]
    assert by_label["10:30 AM"] == ["second"]
    assert by_label["11:00 AM"] == ["second"]
    assert by_label["11:30 AM"] == []


def test_day_view_entries_are_populated_when_possible():
    appts = [
        make_appt("known", datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 9, 30)),
        make_appt("gap", datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 9, 30), patient_id="ghost"),
    ]
    views = build_views(appts)
    row = next(r for r in views.day_view("D1", date(2024, 6, 3)).rows if r.slot.label == "9:00 AM")
    known, gap = row.entries
    assert isinstance(known, PopulatedAppointment)
    assert known.patient.name == "John Smith"
    assert isinstance(gap, BareAppointment)


def test_day_view_for_unknown_doctor_is_empty():
    day = build_views(scenario_appointments()).day_view("nobody", date(2024, 6, 3))
    assert day.doctor is None
    assert day.appointments == []
    assert all(r.entries == [] for r in day.rows)


def test_week_view_scenario():
    views = build_views(scenario_appointments())
    week = views.week_view("D1", date(2024, 6, 5))

    assert week.week_start == date(2024, 6, 3)
    assert week.week_end == date(2024, 6, 9)
    assert week.days == week_days(date(2024, 6, 3))
    assert [a.id for a in week.appointments] == ["first", "second", "wednesday"]

    monday, tuesday, wednesday = week.columns[:3]
    monday_rows = ids_by_label(monday.rows)
    assert "first" in monday_rows["9:00 AM"]
    assert "second" in monday_rows["10:00 AM"]
    assert "second" in monday_rows["10:30 AM"]
    assert monday_rows["12:00 PM"] == []

    assert tuesday.appointments == []
    assert ids_by_label(wednesday.rows)["2:00 PM"] == ["wednesday"]
    assert "wednesday" not in ids_by_label(monday.rows)["2:00 PM"]


def test_week_slots_match_day_slots_for_every_day():
    config = CalendarConfig(start_hour=7, end_hour=12, slot_duration_minutes=20)
    views = build_views(scenario_appointments(), config=config)
    week = views.week_view("D1", date(2024, 6, 3))
    for column in week.columns:
        day_rows = views.day_view("D1", column.day).rows
        assert [r.slot for r in column.rows] == [r.slot for r in day_rows]
        assert [r.slot for r in column.rows] == generate_slots(column.day, config)


def test_week_view_excludes_neighbouring_weeks():
    appts = scenario_appointments() + [
        make_appt("sunday-before", datetime(2024, 6, 2, 23, 0), datetime(2024, 6, 3, 0, 30)),
        make_appt("sunday-last", datetime(2024, 6, 9, 17, 0), datetime(2024, 6, 9, 17, 30)),
    ]
    week = build_views(appts).week_view("D1", date(2024, 6, 9))
    ids = [a.id for a in week.appointments]
    assert "sunday-before" not in ids
    assert "next-week" not in ids
    assert "sunday-last" in ids
    assert [a.id for a in week.columns[6].appointments] == ["sunday-last"]
