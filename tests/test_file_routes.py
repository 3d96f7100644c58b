from __future__ import annotations

from conftest import headers
from tryout.models.resource import File


def _folder(client, name="Materi PU"):
    res = client.post("/api/folders", json={"name": name, "description": "Ringkasan"}, headers=headers(1, "teacher"))
    assert res.status_code == 200
    return res.json()["data"]


def _add(client, folder_id, title="Modul 1", url="https://drive.example.com/modul-1"):
    return client.post(
        f"/api/folders/{folder_id}/files",
        json={"title": title, "description": "Bab 1", "url": url},
        headers=headers(1, "teacher"),
    )


def test_students_can_read_but_not_write(client, student):
    folder = _folder(client)
    assert _add(client, folder["id"]).status_code == 200

    res = client.get(f"/api/folders/{folder['id']}/files", headers=headers(student.id))
    assert res.status_code == 200
    assert [f["title"] for f in res.json()["data"]] == ["Modul 1"]

    res = client.post(
        f"/api/folders/{folder['id']}/files",
        json={"title": "x", "url": "https://example.com/x"},
        headers=headers(student.id),
    )
    assert res.status_code == 403
    assert client.post("/api/folders", json={"name": "x"}, headers=headers(student.id)).status_code == 403


def test_listing_requires_identity(client):
    assert client.get("/api/folders").status_code == 401


def test_edit_and_delete_file(client, db):
    folder = _folder(client)
    created = _add(client, folder["id"]).json()["data"]

    res = client.put(
        f"/api/folders/{folder['id']}/files/{created['id']}",
        json={"title": "Modul 1 (revisi)", "url": "https://drive.example.com/modul-1b"},
        headers=headers(1, "teacher"),
    )
    data = res.json()["data"]
    assert data["title"] == "Modul 1 (revisi)"
    assert data["url"] == "https://drive.example.com/modul-1b"
    assert data["description"] is None

    res = client.delete(f"/api/folders/{folder['id']}/files/{created['id']}", headers=headers(1, "teacher"))
    assert res.json()["data"] == {"deleted": created["id"]}
    assert db.query(File).count() == 0


def test_file_must_belong_to_the_folder(client):
    first = _folder(client, "A")
    second = _folder(client, "B")
    created = _add(client, first["id"]).json()["data"]

    res = client.delete(f"/api/folders/{second['id']}/files/{created['id']}", headers=headers(1, "teacher"))
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "File not found in folder"


def test_unknown_folder_is_not_found(client, student):
    res = client.get("/api/folders/999/files", headers=headers(student.id))
    assert res.status_code == 404
    assert _add(client, 999).status_code == 404


def test_file_url_must_be_a_link(client):
    folder = _folder(client)
    res = _add(client, folder["id"], url="javascript:alert(1)")
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


def test_deleting_a_folder_removes_its_files(client, db):
    folder = _folder(client)
    _add(client, folder["id"])
    _add(client, folder["id"], title="Modul 2", url="https://drive.example.com/modul-2")

    res = client.delete(f"/api/folders/{folder['id']}", headers=headers(1, "teacher"))
    assert res.status_code == 200
    assert db.query(File).count() == 0
    assert client.get("/api/folders", headers=headers(1, "teacher")).json()["data"] == []
