"""
Tests de los endpoints de documentos (/api/documentos).
"""


def _payload(**overrides):
    payload = {
        "filename": "demanda.pdf",
        "document_type": "Demanda",
        "storage_path": "/srv/documentos/demanda.pdf",
        "size_bytes": 1536,
        "extension": ".pdf",
        "uploaded_by": "maria",
    }
    payload.update(overrides)
    return payload


def test_create_document_for_case_exposes_case_fields(api_client, make_client, make_case):
    case = make_case(make_client(), subject="Divorcio")

    response = api_client.post("/api/documentos", json=_payload(case_id=case.id))

    assert response.status_code == 201
    data = response.json()
    assert data["case_id"] == case.id
    assert data["case_number"] == case.case_number
    assert data["case_subject"] == "Divorcio"
    assert data["size_formatted"] == "1.5 KB"


def test_non_positive_case_id_means_no_case(api_client):
    response = api_client.post("/api/documentos", json=_payload(case_id=0))

    assert response.status_code == 201
    data = response.json()
    assert data["case_id"] is None
    assert data["case_number"] is None
    assert data["case_subject"] is None


def test_create_document_for_unknown_case_is_404(api_client):
    response = api_client.post("/api/documentos", json=_payload(case_id=999))

    assert response.status_code == 404


def test_negative_size_is_rejected(api_client):
    response = api_client.post("/api/documentos", json=_payload(size_bytes=-10))

    assert response.status_code == 422


def test_update_document_stamps_modified_at(api_client):
    created = api_client.post("/api/documentos", json=_payload()).json()

    response = api_client.put(
        f"/api/documentos/{created['id']}",
        json={"filename": "demanda_v2.pdf", "document_type": "Demanda"},
    )

    assert response.status_code == 200
    assert response.json()["filename"] == "demanda_v2.pdf"
    assert response.json()["modified_at"] is not None


def test_filter_by_type_is_case_insensitive(api_client):
    api_client.post("/api/documentos", json=_payload(document_type="Contrato"))
    api_client.post("/api/documentos", json=_payload(document_type="Demanda"))

    data = api_client.get("/api/documentos/tipo/CONTRATO").json()

    assert [d["document_type"] for d in data] == ["Contrato"]


def test_list_by_case(api_client, make_client, make_case):
    case = make_case(make_client())
    api_client.post("/api/documentos", json=_payload(case_id=case.id))
    api_client.post("/api/documentos", json=_payload())

    data = api_client.get(f"/api/documentos/expediente/{case.id}").json()

    assert len(data) == 1


def test_delete_document(api_client):
    created = api_client.post("/api/documentos", json=_payload()).json()

    assert api_client.delete(f"/api/documentos/{created['id']}").status_code == 204
    assert api_client.get(f"/api/documentos/{created['id']}").status_code == 404
