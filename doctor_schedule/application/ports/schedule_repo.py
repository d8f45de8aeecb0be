from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol, Sequence


class AppointmentType(str, Enum):
    CHECKUP = "checkup"
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow-up"
    PROCEDURE = "procedure"

    @property
    def label(self) -> str:
        return APPOINTMENT_TYPE_DISPLAY[self]["label"]

    @property
    def color(self) -> str:
        return APPOINTMENT_TYPE_DISPLAY[self]["color"]


APPOINTMENT_TYPE_DISPLAY = {
    AppointmentType.CHECKUP: {"label": "Checkup", "color": "#3b82f6"},
    AppointmentType.CONSULTATION: {"label": "Consultation", "color": "#10b981"},
    AppointmentType.FOLLOW_UP: {"label": "Follow-up", "color": "#f59e0b"},
    AppointmentType.PROCEDURE: {"label": "Procedure", "color": "#8b5cf6"},
}


@dataclass(frozen=True)
class DoctorDto:
    id: str
    name: str
    specialty: str

    @property
    def display_name(self) -> str:
        return f"Dr. {self.name} - {self.specialty}"


@dataclass(frozen=True)
class PatientDto:
    id: str
    name: str


@dataclass(frozen=True)
class AppointmentDto:
    id: str
    doctor_id: str
    patient_id: str
    type: AppointmentType
    start_time: datetime
    end_time: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)


class ScheduleRepository(Protocol):
    def appointments(self) -> Sequence[AppointmentDto]:
        ...

    def doctors(self) -> Sequence[DoctorDto]:
        ...

    def patients(self) -> Sequence[PatientDto]:
        ...

    def doctor_by_id(self, doctor_id: str) -> Optional[DoctorDto]:
        ...

    def patient_by_id(self, patient_id: str) -> Optional[PatientDto]:
        ...
