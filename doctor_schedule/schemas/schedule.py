# doctor_schedule/schemas/schedule.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime


class DoctorResponse(BaseModel):
    id: str
    name: str
    specialty: str
    display_name: str


class PatientResponse(BaseModel):
    id: str
    name: str


class AppointmentDisplay(BaseModel):
    patient_label: str
    type_label: str
    color: str


class AppointmentResponse(BaseModel):
    kind: str  # 'bare' | 'populated'
    id: str
    doctor_id: str
    patient_id: str
    type: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    display: AppointmentDisplay
    patient: Optional[PatientResponse] = None
    doctor: Optional[DoctorResponse] = None


class CalendarConfigResponse(BaseModel):
    start_hour: int
    end_hour: int
    slot_duration_minutes: int
    slots_per_day: int


class TimeSlotResponse(BaseModel):
    start: datetime
    end: datetime
    label: str


class SlotRowResponse(TimeSlotResponse):
    appointments: List[AppointmentResponse] = []


class DayScheduleResponse(BaseModel):
    date: date
    doctor: Optional[DoctorResponse] = None
    appointment_count: int
    slots: List[SlotRowResponse]


class DayColumnResponse(BaseModel):
    date: date
    weekday: str
    appointment_count: int
    slots: List[SlotRowResponse]


class WeekScheduleResponse(BaseModel):
    week_start: date
    week_end: date
    doctor: Optional[DoctorResponse] = None
    appointment_count: int
    days: List[DayColumnResponse]
