import json
import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from pydantic import ValidationError

from ...application.ports.schedule_repo import (
    AppointmentDto,
    DoctorDto,
    PatientDto,
    ScheduleRepository,
)
from ...exceptions import FixtureLoadError
from ...scheduling.slots import local_wall_clock
from ...schemas.fixtures import FixtureFile

logger = logging.getLogger(__name__)


class FixtureScheduleRepository(ScheduleRepository):
    """Read-only in-memory store, loaded once and shared by every reader."""

    def __init__(
        self,
        doctors: Iterable[DoctorDto] = (),
        patients: Iterable[PatientDto] = (),
        appointments: Iterable[AppointmentDto] = (),
    ) -> None:
        self._doctors: Tuple[DoctorDto, ...] = tuple(doctors)
        self._patients: Tuple[PatientDto, ...] = tuple(patients)
        self._appointments: Tuple[AppointmentDto, ...] = tuple(appointments)
        self._doctors_by_id: Dict[str, DoctorDto] = {}
        for d in self._doctors:
            self._doctors_by_id.setdefault(d.id, d)
        self._patients_by_id: Dict[str, PatientDto] = {}
        for p in self._patients:
            self._patients_by_id.setdefault(p.id, p)

    def appointments(self) -> Sequence[AppointmentDto]:
        return self._appointments

    def doctors(self) -> Sequence[DoctorDto]:
        return self._doctors

    def patients(self) -> Sequence[PatientDto]:
        return self._patients

    def doctor_by_id(self, doctor_id: str) -> Optional[DoctorDto]:
        return self._doctors_by_id.get(doctor_id)

    def patient_by_id(self, patient_id: str) -> Optional[PatientDto]:
        return self._patients_by_id.get(patient_id)

    @classmethod
    def from_fixture(cls, fixture: FixtureFile) -> "FixtureScheduleRepository":
        return cls(
            doctors=[DoctorDto(id=d.id, name=d.name, specialty=d.specialty) for d in fixture.doctors],
            patients=[PatientDto(id=p.id, name=p.name) for p in fixture.patients],
            appointments=[
                AppointmentDto(
                    id=a.id,
                    doctor_id=a.doctor_id,
                    patient_id=a.patient_id,
                    type=a.type,
                    start_time=local_wall_clock(a.start_time),
                    end_time=local_wall_clock(a.end_time),
                )
                for a in fixture.appointments
            ],
        )


def load_fixture_repository(path: str) -> FixtureScheduleRepository:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError:
        raise FixtureLoadError(path, "file not found")
    except json.JSONDecodeError as e:
        raise FixtureLoadError(path, f"invalid JSON ({e})")

    try:
        fixture = FixtureFile.model_validate(raw)
    except ValidationError as e:
        raise FixtureLoadError(path, f"{e.error_count()} validation error(s): {e}")

    repo = FixtureScheduleRepository.from_fixture(fixture)
    logger.info(
        f"Loaded fixtures from {path}: {len(repo.doctors())} doctors, "
        f"{len(repo.patients())} patients, {len(repo.appointments())} appointments"
    )
    return repo
