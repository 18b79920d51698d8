"""
Tests de los endpoints de expedientes (/api/expedientes).
"""
from datetime import datetime

from despacho.models import Action, Appointment, CaseStatus


def _payload(client_id, **overrides):
    payload = {
        "case_number": "EXP-2024-100",
        "subject": "Reclamación de cantidad",
        "case_type": "Civil",
        "client_id": client_id,
        "court": "Juzgado de Primera Instancia nº 3",
    }
    payload.update(overrides)
    return payload


def test_create_case_starts_open(api_client, make_client):
    client = make_client()

    response = api_client.post("/api/expedientes", json=_payload(client.id))

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == CaseStatus.OPEN
    assert data["status_label"] == "Abierto"
    assert data["client_name"] == client.full_name
    assert data["opened_at"] is not None


def test_create_case_for_unknown_client_is_404(api_client):
    response = api_client.post("/api/expedientes", json=_payload(999))

    assert response.status_code == 404


def test_duplicate_case_number_is_conflict(api_client, make_client):
    client = make_client()
    api_client.post("/api/expedientes", json=_payload(client.id))

    response = api_client.post("/api/expedientes", json=_payload(client.id, subject="Otro"))

    assert response.status_code == 409
    assert response.json()["detail"]["error_code"] == "DUPLICATE_ENTITY"


def test_closing_stamps_closed_at_and_overwrites_notes(api_client, make_client, make_case):
    case = make_case(make_client(), notes="Notas iniciales")

    response = api_client.patch(
        f"/api/expedientes/{case.id}/estado",
        json={"status": CaseStatus.CLOSED.value, "notes": "Sentencia firme"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status_label"] == "Cerrado"
    assert data["closed_at"] is not None
    assert data["notes"] == "Sentencia firme"


def test_any_transition_is_allowed(api_client, make_client, make_case):
    case = make_case(make_client(), status=CaseStatus.CLOSED)

    response = api_client.patch(f"/api/expedientes/{case.id}/estado", json={"status": CaseStatus.OPEN.value})

    assert response.status_code == 200
    assert response.json()["status_label"] == "Abierto"


def test_blank_notes_do_not_overwrite(api_client, make_client, make_case):
    case = make_case(make_client(), notes="Conservar")

    response = api_client.patch(
        f"/api/expedientes/{case.id}/estado",
        json={"status": CaseStatus.SUSPENDED.value, "notes": "   "},
    )

    assert response.json()["notes"] == "Conservar"
    assert response.json()["closed_at"] is None


def test_list_by_status(api_client, make_client, make_case):
    client = make_client()
    make_case(client, status=CaseStatus.OPEN)
    archived = make_case(client, status=CaseStatus.ARCHIVED)

    data = api_client.get(f"/api/expedientes/estado/{CaseStatus.ARCHIVED.value}").json()

    assert [c["id"] for c in data] == [archived.id]


def test_list_by_client_and_overview(api_client, make_client, make_case):
    first = make_client("Ana", "Uno")
    second = make_client("Bea", "Dos")
    make_case(first)
    make_case(second)

    by_client = api_client.get(f"/api/expedientes/cliente/{first.id}").json()
    overview = api_client.get("/api/expedientes/resumen").json()

    assert [c["client_id"] for c in by_client] == [first.id]
    assert len(overview) == 2


def test_search_cases(api_client, make_client, make_case):
    client = make_client()
    make_case(client, subject="Despido improcedente", case_type="Laboral")
    make_case(client, subject="Herencia", case_type="Sucesiones")

    data = api_client.get("/api/expedientes/buscar", params={"termino": "laboral"}).json()

    assert [c["subject"] for c in data] == ["Despido improcedente"]


def test_delete_case_cascades_actions_and_appointments(
    api_client, db_session, make_client, make_case, make_action, make_appointment
):
    case = make_case(make_client())
    make_action(case, datetime(2024, 2, 1))
    make_appointment(case, datetime(2024, 2, 2, 10))

    response = api_client.delete(f"/api/expedientes/{case.id}")

    assert response.status_code == 204
    assert db_session.query(Action).count() == 0
    assert db_session.query(Appointment).count() == 0
