import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List, Optional, Sequence, Tuple, Union

from ..ports.schedule_repo import AppointmentDto, DoctorDto, PatientDto, ScheduleRepository
from .entries import BareAppointment, CalendarEntry, PopulatedAppointment

logger = logging.getLogger(__name__)

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)


def day_bounds(day: Union[date, datetime]) -> Tuple[datetime, datetime]:
    """Inclusive [00:00:00.000, 23:59:59.999] bounds of a calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, START_OF_DAY), datetime.combine(day, END_OF_DAY)


def sort_by_start(appointments: Sequence[AppointmentDto]) -> List[AppointmentDto]:
    """Chronological copy; query results keep stored order unless sorted here."""
    return sorted(appointments, key=lambda a: a.start_time)


@dataclass
class ScheduleQueryService:
    repo: ScheduleRepository

    def by_doctor(self, doctor_id: str) -> List[AppointmentDto]:
        return [a for a in self.repo.appointments() if a.doctor_id == doctor_id]

    def by_doctor_and_date(self, doctor_id: str, day: Union[date, datetime]) -> List[AppointmentDto]:
        start_of_day, end_of_day = day_bounds(day)
        return self.by_doctor_and_date_range(doctor_id, start_of_day, end_of_day)

    def by_doctor_and_date_range(self, doctor_id: str, range_start: datetime, range_end: datetime) -> List[AppointmentDto]:
        # start time only: an appointment running into the range from before it is excluded
        return [
            a for a in self.repo.appointments()
            if a.doctor_id == doctor_id and range_start <= a.start_time <= range_end
        ]

    def populate(self, appointment: AppointmentDto) -> Optional[PopulatedAppointment]:
        patient = self.repo.patient_by_id(appointment.patient_id)
        doctor = self.repo.doctor_by_id(appointment.doctor_id)
        if not patient or not doctor:
            logger.warning(
                f"Cannot populate appointment {appointment.id}: "
                f"patient {appointment.patient_id} found={bool(patient)}, "
                f"doctor {appointment.doctor_id} found={bool(doctor)}"
            )
            return None
        return PopulatedAppointment(appointment=appointment, patient=patient, doctor=doctor)

    def resolve(self, appointment: AppointmentDto) -> CalendarEntry:
        populated = self.populate(appointment)
        if populated is None:
            return BareAppointment(appointment=appointment)
        return populated

    def all_doctors(self) -> List[DoctorDto]:
        return list(self.repo.doctors())

    def doctor_by_id(self, doctor_id: str) -> Optional[DoctorDto]:
        return self.repo.doctor_by_id(doctor_id)

    def patient_by_id(self, patient_id: str) -> Optional[PatientDto]:
        return self.repo.patient_by_id(patient_id)
