"""
HTTP API tests against a workspace wired with test doubles.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from medscribe.app import create_app
from medscribe.core.constants import (
    PATIENTS_DOCUMENT_KEY,
    STATUS_API_SETTINGS_SAVED,
    STATUS_NOTES_GENERATED,
    STATUS_PATIENT_DESELECTED,
    STATUS_PATIENT_SELECTED,
    STATUS_RECORDING,
    STATUS_RECORDING_COMPLETE,
    STATUS_SAVE_VISIT_PRECONDITION,
    STATUS_VISIT_SAVED,
)


@pytest.fixture
def client(workspace):
    app = create_app()
    app.state.workspace = workspace
    with TestClient(app) as test_client:
        yield test_client


def _add_patient(client, **fields):
    payload = {"name": "Jane Doe", "dob": "1980-01-01", "mrn": "MRN-1", "conditions": "Obesity"}
    payload.update(fields)
    response = client.post("/patients", json=payload)
    assert response.status_code == 201
    return response.json()["data"]


def test_session_snapshot(client):
    response = client.get("/session")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["transcript"] == ""
    assert data["is_recording"] is False
    assert data["recording_state"] == "idle"
    assert data["status"] == "Ready to record"


def test_request_id_is_echoed(client):
    response = client.get("/session", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.json()["request_id"] == "req-123"


def test_add_and_list_patients(client):
    patient = _add_patient(client)

    assert patient["label"] == "Jane Doe (MRN-1) - 0 visits"
    listing = client.get("/patients").json()["data"]
    assert listing["total"] == 1
    assert listing["patients"][0]["id"] == patient["id"]


def test_blank_patient_name_is_422(client):
    response = client.post("/patients", json={"name": "   "})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Patient name is required"


def test_unknown_patient_is_404(client):
    assert client.get("/patients/does-not-exist").status_code == 404
    assert client.post("/patients/does-not-exist/select").status_code == 404


def test_select_and_deselect_patient(client):
    patient = _add_patient(client)

    response = client.post(f"/patients/{patient['id']}/select")
    assert response.json()["message"] == STATUS_PATIENT_SELECTED.format(name="Jane Doe")
    assert client.get("/session").json()["data"]["selected_patient_id"] == patient["id"]

    response = client.delete("/patients/selection")
    assert response.json()["message"] == STATUS_PATIENT_DESELECTED
    assert client.get("/session").json()["data"]["selected_patient_id"] is None


def test_recording_start_and_stop(client, speech_engine):
    response = client.post("/recording/start")
    assert response.status_code == 200
    assert response.json()["data"] == {"state": "active", "is_recording": True, "status": STATUS_RECORDING}

    speech_engine.last.final("Patient reports reduced appetite.")

    response = client.post("/recording/stop")
    assert response.json()["data"]["state"] == "idle"
    assert response.json()["message"] == STATUS_RECORDING_COMPLETE
    assert client.get("/session").json()["data"]["transcript"] == "Patient reports reduced appetite."


def test_generate_and_save_notes(client, workspace, document_store, completion_service):
    patient = _add_patient(client)
    client.post(f"/patients/{patient['id']}/select")

    response = client.post("/notes/save-to-patient")
    assert response.json()["data"]["saved"] is False
    assert response.json()["message"] == STATUS_SAVE_VISIT_PRECONDITION

    workspace.session.transcript = "Patient reports reduced appetite."
    response = client.post("/notes/generate")
    data = response.json()["data"]
    assert data["generated"] is True
    assert data["status"] == STATUS_NOTES_GENERATED
    assert data["medical_notes"] == completion_service.response

    response = client.post("/notes/save-to-patient")
    body = response.json()
    assert body["message"] == STATUS_VISIT_SAVED
    assert body["data"]["patient"]["visit_count"] == 1
    assert body["data"]["patient"]["label"] == "Jane Doe (MRN-1) - 1 visits"


def test_recent_visits_are_truncated(client, workspace):
    patient = _add_patient(client)
    client.post(f"/patients/{patient['id']}/select")
    for n in range(4):
        workspace.session.medical_notes = f"{n}" + "x" * 199
        client.post("/notes/save-to-patient")

    visits = client.get(f"/patients/{patient['id']}/visits/recent").json()["data"]

    assert len(visits) == 3
    assert [v["notes_preview"][0] for v in visits] == ["1", "2", "3"]
    assert all(len(v["notes_preview"]) == 153 for v in visits)


def test_api_settings_are_masked_unless_revealed(client):
    masked = client.get("/settings/api").json()["data"]
    assert masked["speech_key"] == "***********1234"
    assert masked["openai_key"] == "***********5678"
    assert masked["keys_revealed"] is False
    assert masked["supported_regions"] == ["eastus", "westus2", "centralus", "westeurope"]

    revealed = client.get("/settings/api", params={"reveal": "true"}).json()["data"]
    assert revealed["speech_key"] == "speech-key-1234"


def test_update_api_settings_keeps_omitted_keys(client, workspace):
    response = client.put("/settings/api", json={"speech_region": "westus2"})

    assert response.status_code == 200
    assert response.json()["message"] == STATUS_API_SETTINGS_SAVED
    current = workspace.api_settings.current
    assert current.speech_region == "westus2"
    assert current.speech_key == "speech-key-1234"


def test_update_api_settings_rejects_bad_region(client):
    response = client.put("/settings/api", json={"speech_region": "east us!"})

    assert response.status_code == 422


def test_preferences_round_trip(client):
    assert client.get("/preferences").json()["data"]["note_style"] == "standard"

    response = client.put(
        "/preferences",
        json={"note_style": "detailed", "include_assessment": True, "include_plan": False, "custom_instructions": ""},
    )

    assert response.status_code == 200
    assert client.get("/preferences").json()["data"]["include_plan"] is False


def test_clear_session(client, workspace):
    workspace.session.transcript = "abc"

    response = client.post("/session/clear")

    assert response.json()["data"]["transcript"] == ""
    assert response.json()["message"] == "Ready to record"


def test_patients_document_is_written(client, document_store):
    _add_patient(client)

    stored = asyncio.run(document_store.load(PATIENTS_DOCUMENT_KEY))
    assert stored[0]["name"] == "Jane Doe"
    assert set(stored[0]) == {"id", "name", "dob", "mrn", "conditions", "visits", "createdAt"}
