"""Tests for task routes."""

from fastapi.testclient import TestClient


def _create(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    payload = {"title": "Call client", "scheduled_date": "2024-05-04"}
    payload.update(overrides)
    response = client.post("/tasks/", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestTaskRoutes:
    def test_requires_auth(self, client: TestClient):
        assert client.get("/tasks/").status_code == 401
        assert (
            client.post(
                "/tasks/", json={"title": "x", "scheduled_date": "2024-05-04"}
            ).status_code
            == 401
        )

    def test_create_and_list(self, client: TestClient, auth_headers: dict[str, str]):
        created = _create(client, auth_headers)
        assert created["status"] == "pending"

        response = client.get("/tasks/", headers=auth_headers)

        assert response.status_code == 200
        assert [t["id_task"] for t in response.json()] == [created["id_task"]]

    def test_filters(self, client: TestClient, auth_headers: dict[str, str]):
        _create(client, auth_headers, title="a")
        _create(client, auth_headers, title="b", status="completed")
        _create(client, auth_headers, title="c", scheduled_date="2024-05-05")

        completed = client.get(
            "/tasks/", params={"status": "completed"}, headers=auth_headers
        ).json()
        on_day = client.get(
            "/tasks/", params={"scheduled_date": "2024-05-04"}, headers=auth_headers
        ).json()

        assert [t["title"] for t in completed] == ["b"]
        assert sorted(t["title"] for t in on_day) == ["a", "b"]

    def test_complete_task(self, client: TestClient, auth_headers: dict[str, str]):
        created = _create(client, auth_headers)

        response = client.patch(
            f"/tasks/{created['id_task']}",
            json={"status": "completed"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    def test_null_title_rejected(self, client: TestClient, auth_headers: dict[str, str]):
        created = _create(client, auth_headers)

        response = client.patch(
            f"/tasks/{created['id_task']}",
            json={"title": None},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["field"] == "title"

    def test_delete_task(self, client: TestClient, auth_headers: dict[str, str]):
        created = _create(client, auth_headers)

        response = client.delete(f"/tasks/{created['id_task']}", headers=auth_headers)

        assert response.status_code == 204
        assert (
            client.get(f"/tasks/{created['id_task']}", headers=auth_headers).status_code
            == 404
        )

    def test_other_user_sees_404(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        other_auth_headers: dict[str, str],
    ):
        created = _create(client, auth_headers)
        url = f"/tasks/{created['id_task']}"

        assert client.get(url, headers=other_auth_headers).status_code == 404
        assert (
            client.patch(url, json={"title": "x"}, headers=other_auth_headers).status_code
            == 404
        )
        assert client.delete(url, headers=other_auth_headers).status_code == 404
        assert client.get("/tasks/", headers=other_auth_headers).json() == []
        assert client.get(url, headers=auth_headers).json()["title"] == "Call client"

    def test_invalid_status(self, client: TestClient, auth_headers: dict[str, str]):
        response = client.post(
            "/tasks/",
            json={"title": "x", "scheduled_date": "2024-05-04", "status": "done"},
            headers=auth_headers,
        )
        assert response.status_code == 422
