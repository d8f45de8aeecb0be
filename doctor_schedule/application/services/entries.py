"""Calendar entries: an appointment either on its own or joined with its patient and doctor."""
from dataclasses import dataclass, field
from typing import Union

from ..ports.schedule_repo import AppointmentDto, DoctorDto, PatientDto


@dataclass(frozen=True)
class BareAppointment:
    appointment: AppointmentDto
    kind: str = field(default="bare", init=False)


@dataclass(frozen=True)
class PopulatedAppointment:
    appointment: AppointmentDto
    patient: PatientDto
    doctor: DoctorDto
    kind: str = field(default="populated", init=False)


CalendarEntry = Union[BareAppointment, PopulatedAppointment]


def patient_label(entry: CalendarEntry) -> str:
    """Patient name when known, otherwise the raw patient id."""
    if isinstance(entry, PopulatedAppointment):
        return entry.patient.name
    if isinstance(entry, BareAppointment):
        return f"Patient {entry.appointment.patient_id}"
    raise TypeError(f"Unsupported calendar entry: {type(entry).__name__}")
