# File: /tests/test_saved_queries_api.py | Version: 1.0 | Title: Saved queries over HTTP (CRUD, visibility, star, apply)
from __future__ import annotations

from wpquery.security import create_access_token

OWNER = 5
OTHER = 7


def _headers(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}


def _create(client, user_id: int = OWNER, **overrides) -> dict:
    payload = {
        "name": "My open work",
        "filters": [{"status_id": {"operator": "=", "values": ["1", "2"]}}],
        "sortBy": [["priority", "asc"], ["id", "desc"]],
    }
    payload.update(overrides)
    r = client.post("/queries", json=payload, headers=_headers(user_id))
    assert r.status_code == 201, r.text
    return r.json()


def test_create_requires_token(client):
    r = client.post("/queries", json={"name": "Nope"})
    assert r.status_code == 401


def test_create_and_get(client):
    created = _create(client, columns=["id", "subject", "status"], groupBy="status")
    assert created["user_id"] == OWNER
    assert created["visibility"] == "private"
    assert created["filters"] == [{"status_id": {"operator": "=", "values": ["1", "2"]}}]
    assert created["sortBy"] == [["priority", "asc"], ["id", "desc"]]
    assert created["columns"] == ["id", "subject", "status"]
    assert created["groupBy"] == "status"
    assert created["starred"] is False

    r = client.get(f"/queries/{created['id']}", headers=_headers(OWNER))
    assert r.status_code == 200
    assert r.json()["name"] == "My open work"


def test_create_defaults(client):
    created = _create(client, filters=[], sortBy=[])
    assert created["sortBy"] == [["id", "desc"]]
    assert "subject" in created["columns"]
    assert created["display"] == "list"


def test_create_rejects_bad_filters(client):
    r = client.post(
        "/queries",
        json={"name": "Bad", "filters": [{"status_id": {"operator": "??", "values": []}}]},
        headers=_headers(OWNER),
    )
    assert r.status_code == 400


def test_private_query_hidden_from_others(client):
    created = _create(client)
    qid = created["id"]

    assert client.get(f"/queries/{qid}", headers=_headers(OTHER)).status_code == 404
    assert client.get(f"/queries/{qid}").status_code == 404
    # writes by non-owners look like a missing query
    assert client.patch(f"/queries/{qid}", json={"name": "x"}, headers=_headers(OTHER)).status_code == 404
    assert client.delete(f"/queries/{qid}", headers=_headers(OTHER)).status_code == 404


def test_public_query_visible_to_anyone(client):
    created = _create(client, visibility="public")
    qid = created["id"]

    assert client.get(f"/queries/{qid}").status_code == 200
    assert client.get(f"/queries/{qid}", headers=_headers(OTHER)).status_code == 200
    names = [q["name"] for q in client.get("/queries").json()]
    assert "My open work" in names


def test_list_is_scoped_to_requester_and_project(client):
    _create(client, name="Mine in project 1", project_id=1)
    _create(client, name="Mine global")
    _create(client, name="Mine in project 2", project_id=2)
    _create(client, user_id=OTHER, name="Theirs private", project_id=1)

    names = [q["name"] for q in client.get("/queries", headers=_headers(OWNER)).json()]
    assert names == ["Mine global", "Mine in project 1", "Mine in project 2"]

    scoped = client.get("/queries", params={"project_id": 1}, headers=_headers(OWNER)).json()
    assert [q["name"] for q in scoped] == ["Mine global", "Mine in project 1"]


def test_patch_updates_only_given_fields(client):
    created = _create(client)
    qid = created["id"]

    r = client.patch(
        f"/queries/{qid}",
        json={
            "name": "Renamed",
            "display": "board",
            "filters": [{"assigned_to_id": {"operator": "=", "values": ["me"]}}],
        },
        headers=_headers(OWNER),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["name"] == "Renamed"
    assert body["display"] == "board"
    assert body["filters"] == [{"assigned_to_id": {"operator": "=", "values": ["me"]}}]
    assert body["sortBy"] == [["priority", "asc"], ["id", "desc"]]


def test_patch_gantt_turns_on_timeline(client):
    created = _create(client)
    r = client.patch(f"/queries/{created['id']}", json={"display": "gantt"}, headers=_headers(OWNER))
    assert r.status_code == 200
    assert r.json()["show_timeline"] is True


def test_star_and_unstar(client):
    _create(client, name="A")
    b = _create(client, name="B")

    r = client.post(f"/queries/{b['id']}/star", headers=_headers(OWNER))
    assert r.status_code == 200
    assert r.json()["starred"] is True

    names = [q["name"] for q in client.get("/queries", headers=_headers(OWNER)).json()]
    assert names == ["B", "A"]

    r = client.delete(f"/queries/{b['id']}/star", headers=_headers(OWNER))
    assert r.json()["starred"] is False


def test_delete(client):
    created = _create(client)
    qid = created["id"]
    r = client.delete(f"/queries/{qid}", headers=_headers(OWNER))
    assert r.status_code == 200
    assert r.json() == {"detail": "Query deleted"}
    assert client.get(f"/queries/{qid}", headers=_headers(OWNER)).status_code == 404


def test_apply_saved_query(client, seeded):
    created = _create(client)
    r = client.get(f"/queries/{created['id']}/work_packages", headers=_headers(OWNER))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["total"] == 4
    # priority asc (missing last), then id desc
    assert [i["id"] for i in body["items"]] == [1, 2, 5, 4]


def test_apply_me_query_uses_each_requester(client, seeded):
    created = _create(
        client,
        visibility="public",
        filters=[{"assigned_to_id": {"operator": "=", "values": ["me"]}}],
        sortBy=[["id", "asc"]],
    )
    url = f"/queries/{created['id']}/work_packages"
    assert [i["id"] for i in client.get(url, headers=_headers(OWNER)).json()["items"]] == [1, 4]
    assert [i["id"] for i in client.get(url, headers=_headers(OTHER)).json()["items"]] == [2]
    assert client.get(url).json()["total"] == 0


def test_default_query(client):
    r = client.get("/queries/default")
    assert r.status_code == 200
    body = r.json()
    assert body["filters"] == []
    assert body["sortBy"] == [["id", "desc"]]
    assert body["display"] == "list"
    assert body["starred"] is False
