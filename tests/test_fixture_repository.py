import json
from datetime import datetime, timezone

import pytest

from doctor_schedule.application.ports.schedule_repo import AppointmentType
from doctor_schedule.core.config import DEFAULT_FIXTURES_PATH
from doctor_schedule.exceptions import FixtureLoadError, ScheduleDataError
from doctor_schedule.infrastructure.fixtures.fixture_schedule_repository import load_fixture_repository


def write_fixture(tmp_path, payload):
    path = tmp_path / "fixtures.json"
    path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload, encoding="utf-8")
    return str(path)


def test_bundled_fixtures_load():
    repo = load_fixture_repository(DEFAULT_FIXTURES_PATH)
    assert len(repo.doctors()) == 3
    assert repo.doctor_by_id("doctor-1").specialty == "Cardiology"
    assert repo.patient_by_id("patient-1").name == "John Smith"
    first = repo.appointments()[0]
    assert first.id == "apt-1"
    assert first.type is AppointmentType.CHECKUP
    assert first.start_time == datetime(2024, 6, 3, 9, 0)
    for a in repo.appointments():
        assert repo.doctor_by_id(a.doctor_id) is not None
        assert repo.patient_by_id(a.patient_id) is not None


def test_accepts_snake_case_fields(tmp_path):
    path = write_fixture(tmp_path, {
        "doctors": [{"id": "D1", "name": "Sarah Chen", "specialty": "Cardiology"}],
        "appointments": [{
            "id": "a1", "doctor_id": "D1", "patient_id": "p1", "type": "procedure",
            "start_time": "2024-06-03T09:00:00", "end_time": "2024-06-03T10:00:00",
        }],
    })
    repo = load_fixture_repository(path)
    assert repo.patients() == ()
    assert repo.appointments()[0].type is AppointmentType.PROCEDURE
    assert repo.patient_by_id("p1") is None


def test_offset_timestamps_become_local_wall_clock(tmp_path):
    path = write_fixture(tmp_path, {
        "appointments": [{
            "id": "a1", "doctorId": "D1", "patientId": "p1", "type": "checkup",
            "startTime": "2024-06-03T09:00:00Z", "endTime": "2024-06-03T09:30:00Z",
        }],
    })
    a = load_fixture_repository(path).appointments()[0]
    expected = datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert a.start_time.tzinfo is None
    assert a.start_time == expected


def test_first_record_wins_on_duplicate_ids(tmp_path):
    path = write_fixture(tmp_path, {
        "doctors": [
            {"id": "D1", "name": "Sarah Chen", "specialty": "Cardiology"},
            {"id": "D1", "name": "Someone Else", "specialty": "Surgery"},
        ],
    })
    repo = load_fixture_repository(path)
    assert len(repo.doctors()) == 2
    assert repo.doctor_by_id("D1").name == "Sarah Chen"


def test_missing_file(tmp_path):
    with pytest.raises(FixtureLoadError) as exc:
        load_fixture_repository(str(tmp_path / "nope.json"))
    assert exc.value.reason == "file not found"


def test_invalid_json(tmp_path):
    path = write_fixture(tmp_path, "{not json")
    with pytest.raises(FixtureLoadError):
        load_fixture_repository(path)


def test_unknown_appointment_type_is_rejected(tmp_path):
    path = write_fixture(tmp_path, {
        "appointments": [{
            "id": "a1", "doctorId": "D1", "patientId": "p1", "type": "surgery",
            "startTime": "2024-06-03T09:00:00", "endTime": "2024-06-03T09:30:00",
        }],
    })
    with pytest.raises(ScheduleDataError):
        load_fixture_repository(path)
