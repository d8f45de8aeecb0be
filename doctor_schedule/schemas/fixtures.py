# doctor_schedule/schemas/fixtures.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime

from ..application.ports.schedule_repo import AppointmentType


class FixtureDoctor(BaseModel):
    id: str
    name: str
    specialty: str


class FixturePatient(BaseModel):
    id: str
    name: str


class FixtureAppointment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    doctor_id: str = Field(alias="doctorId")
    patient_id: str = Field(alias="patientId")
    type: AppointmentType
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")


class FixtureFile(BaseModel):
    doctors: List[FixtureDoctor] = []
    patients: List[FixturePatient] = []
    appointments: List[FixtureAppointment] = []
