"""
Test medical note endpoints.
"""


def test_create_and_list(client, headers, note_payload):
    response = client.post("/api/notes", json=note_payload, headers=headers)
    assert response.status_code == 201
    note = response.json()["note"]
    assert note["type"] == "medication"
    assert note["title"] == "New prescription"

    notes = client.get("/api/notes", headers=headers).json()["notes"]
    assert [n["id"] for n in notes] == [note["id"]]
    assert notes[0]["parents"]["name"] == "Mom"


def test_list_by_type(client, headers, note_payload):
    client.post("/api/notes", json=note_payload, headers=headers)
    client.post("/api/notes", json=dict(note_payload, type="symptom", title="Cough"), headers=headers)

    symptoms = client.get("/api/notes/type/symptom", headers=headers).json()["notes"]
    assert [n["title"] for n in symptoms] == ["Cough"]
    assert client.get("/api/notes/type/general", headers=headers).json() == {"notes": []}


def test_list_by_invalid_type(client, headers):
    response = client.get("/api/notes/type/gossip", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid note type"}


def test_list_by_type_without_parents(client, db, headers):
    response = client.get("/api/notes/type/general", headers=headers)
    assert response.json() == {"notes": []}
    assert [call[1] for call in db.calls] == ["parents"]


def test_list_for_parent(client, headers, other_headers, parent, note_payload):
    client.post("/api/notes", json=note_payload, headers=headers)
    assert len(client.get(f"/api/notes/parent/{parent['id']}", headers=headers).json()["notes"]) == 1
    assert client.get(f"/api/notes/parent/{parent['id']}", headers=other_headers).status_code == 404


def test_create_validation(client, headers, note_payload):
    response = client.post("/api/notes", json=dict(note_payload, type="diary", content=""), headers=headers)
    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"type", "content"}


def test_create_for_other_users_parent(client, other_headers, note_payload):
    response = client.post("/api/notes", json=note_payload, headers=other_headers)
    assert response.status_code == 404


def test_update_note(client, headers, note_payload):
    note = client.post("/api/notes", json=note_payload, headers=headers).json()["note"]
    response = client.put(f"/api/notes/{note['id']}", json={"title": "Dose changed", "type": "general"}, headers=headers)
    assert response.status_code == 200
    updated = response.json()["note"]
    assert updated["title"] == "Dose changed"
    assert updated["type"] == "general"
    assert updated["content"] == note_payload["content"]


def test_update_without_allowed_fields(client, headers, note_payload):
    note = client.post("/api/notes", json=note_payload, headers=headers).json()["note"]
    response = client.put(f"/api/notes/{note['id']}", json={"color": "red"}, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No fields to update"}


def test_other_user_cannot_modify_note(client, db, headers, other_headers, note_payload):
    note = client.post("/api/notes", json=note_payload, headers=headers).json()["note"]

    response = client.put(f"/api/notes/{note['id']}", json={"title": "Mine"}, headers=other_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Medical note not found"}

    response = client.delete(f"/api/notes/{note['id']}", headers=other_headers)
    assert response.status_code == 404
    assert len(db.tables["medical_notes"]) == 1


def test_delete_note(client, headers, note_payload):
    note = client.post("/api/notes", json=note_payload, headers=headers).json()["note"]
    response = client.delete(f"/api/notes/{note['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Medical note deleted successfully"}
    assert client.get("/api/notes", headers=headers).json() == {"notes": []}


def test_timestamp_date_rejected(client, headers, note_payload):
    response = client.post("/api/notes", json=dict(note_payload, date=1710460800), headers=headers)
    assert response.status_code == 400
    assert [detail["field"] for detail in response.json()["details"]] == ["date"]
