from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from datetime import date, datetime
import logging

from ..application.ports.schedule_repo import DoctorDto, ScheduleRepository
from ..application.services.calendar_view_service import CalendarViewService, SlotRow
from ..application.services.entries import BareAppointment, CalendarEntry, PopulatedAppointment, patient_label
from ..application.services.schedule_query_service import ScheduleQueryService
from ..scheduling.calendar_config import CalendarConfig
from ..scheduling.slots import generate_slots, local_wall_clock
from ..schemas.schedule import (
    AppointmentDisplay,
    AppointmentResponse,
    CalendarConfigResponse,
    DayColumnResponse,
    DayScheduleResponse,
    DoctorResponse,
    PatientResponse,
    SlotRowResponse,
    TimeSlotResponse,
    WeekScheduleResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Schedule"])


def get_repository(request: Request) -> ScheduleRepository:
    return request.app.state.repository


def get_calendar_config(request: Request) -> CalendarConfig:
    return request.app.state.calendar_config


def get_query_service(repo: ScheduleRepository = Depends(get_repository)) -> ScheduleQueryService:
    return ScheduleQueryService(repo=repo)


def get_view_service(
    queries: ScheduleQueryService = Depends(get_query_service),
    config: CalendarConfig = Depends(get_calendar_config),
) -> CalendarViewService:
    return CalendarViewService(queries=queries, config=config)


def _doctor_response(d: Optional[DoctorDto]) -> Optional[DoctorResponse]:
    if d is None:
        return None
    return DoctorResponse(id=d.id, name=d.name, specialty=d.specialty, display_name=d.display_name)


def _entry_response(entry: CalendarEntry) -> AppointmentResponse:
    a = entry.appointment
    patient = None
    doctor = None
    if isinstance(entry, PopulatedAppointment):
        patient = PatientResponse(id=entry.patient.id, name=entry.patient.name)
        doctor = _doctor_response(entry.doctor)
    return AppointmentResponse(
        kind=entry.kind,
        id=a.id,
        doctor_id=a.doctor_id,
        patient_id=a.patient_id,
        type=a.type.value,
        start_time=a.start_time,
        end_time=a.end_time,
        duration_minutes=a.duration_minutes,
        display=AppointmentDisplay(
            patient_label=patient_label(entry),
            type_label=a.type.label,
            color=a.type.color,
        ),
        patient=patient,
        doctor=doctor,
    )


def _row_response(row: SlotRow) -> SlotRowResponse:
    return SlotRowResponse(
        start=row.slot.start,
        end=row.slot.end,
        label=row.slot.label,
        appointments=[_entry_response(e) for e in row.entries],
    )


def _require_doctor(queries: ScheduleQueryService, doctor_id: str) -> DoctorDto:
    doctor = queries.doctor_by_id(doctor_id)
    if not doctor:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return doctor


@router.get("/calendar/config", response_model=CalendarConfigResponse)
def get_config(config: CalendarConfig = Depends(get_calendar_config)):
    return CalendarConfigResponse(
        start_hour=config.start_hour,
        end_hour=config.end_hour,
        slot_duration_minutes=config.slot_duration_minutes,
        slots_per_day=config.slots_per_day,
    )


@router.get("/calendar/slots", response_model=List[TimeSlotResponse])
def get_slots(
    day: Optional[date] = Query(None, alias="date"),
    config: CalendarConfig = Depends(get_calendar_config),
):
    slots = generate_slots(day or date.today(), config)
    return [TimeSlotResponse(start=s.start, end=s.end, label=s.label) for s in slots]


@router.get("/doctors", response_model=List[DoctorResponse])
def list_doctors(queries: ScheduleQueryService = Depends(get_query_service)):
    return [_doctor_response(d) for d in queries.all_doctors()]


@router.get("/doctors/{doctor_id}", response_model=DoctorResponse)
def get_doctor(doctor_id: str, queries: ScheduleQueryService = Depends(get_query_service)):
    return _doctor_response(_require_doctor(queries, doctor_id))


@router.get("/doctors/{doctor_id}/appointments", response_model=List[AppointmentResponse])
def list_doctor_appointments(
    doctor_id: str,
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    populate: bool = Query(False),
    queries: ScheduleQueryService = Depends(get_query_service),
):
    _require_doctor(queries, doctor_id)
    if (start is None) != (end is None):
        raise HTTPException(status_code=400, detail="Both start and end are required for a date range")
    if start is not None and day is not None:
        raise HTTPException(status_code=400, detail="Use either date or start/end, not both")
    if start is not None:
        # stored times are naive local wall clock
        start, end = local_wall_clock(start), local_wall_clock(end)
    if start is not None and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")

    try:
        if start is not None:
            appts = queries.by_doctor_and_date_range(doctor_id, start, end)
        elif day is not None:
            appts = queries.by_doctor_and_date(doctor_id, day)
        else:
            appts = queries.by_doctor(doctor_id)
        if populate:
            return [_entry_response(queries.resolve(a)) for a in appts]
        return [_entry_response(BareAppointment(appointment=a)) for a in appts]
    except Exception as e:
        logger.error(f"Error retrieving appointments for doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointments")


@router.get("/doctors/{doctor_id}/schedule/day", response_model=DayScheduleResponse)
def get_day_schedule(
    doctor_id: str,
    day: Optional[date] = Query(None, alias="date"),
    views: CalendarViewService = Depends(get_view_service),
):
    _require_doctor(views.queries, doctor_id)
    try:
        schedule = views.day_view(doctor_id, day or date.today())
        return DayScheduleResponse(
            date=schedule.day,
            doctor=_doctor_response(schedule.doctor),
            appointment_count=len(schedule.appointments),
            slots=[_row_response(r) for r in schedule.rows],
        )
    except Exception as e:
        logger.error(f"Error building day schedule for doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to build day schedule")


@router.get("/doctors/{doctor_id}/schedule/week", response_model=WeekScheduleResponse)
def get_week_schedule(
    doctor_id: str,
    day: Optional[date] = Query(None, alias="date"),
    views: CalendarViewService = Depends(get_view_service),
):
    _require_doctor(views.queries, doctor_id)
    try:
        schedule = views.week_view(doctor_id, day or date.today())
        return WeekScheduleResponse(
            week_start=schedule.week_start,
            week_end=schedule.week_end,
            doctor=_doctor_response(schedule.doctor),
            appointment_count=len(schedule.appointments),
            days=[
                DayColumnResponse(
                    date=c.day,
                    weekday=c.day.strftime("%A"),
                    appointment_count=len(c.appointments),
                    slots=[_row_response(r) for r in c.rows],
                )
                for c in schedule.columns
            ],
        )
    except Exception as e:
        logger.error(f"Error building week schedule for doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to build week schedule")
