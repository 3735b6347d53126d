"""Endpoint tests for the notification pull API."""

from conftest import API, auth_headers, create_task


def _notify(client, manager, recipient, title="Heads up", related=None):
    body = {"user_id": recipient.id, "type": "deadline_reminder", "title": title, "message": "Soon"}
    if related is not None:
        body["related"] = related
    response = client.post(f"{API}/notifications", json=body, headers=auth_headers(manager))
    assert response.status_code == 201, response.text
    return response.json()


class TestListing:

    def test_latest_first_without_checkpoint(self, client, manager, employee):
        for title in ("one", "two", "three"):
            _notify(client, manager, employee, title=title)

        body = client.get(f"{API}/notifications", headers=auth_headers(employee)).json()
        assert [n["title"] for n in body["notifications"]] == ["three", "two", "one"]
        assert body["unread_count"] == 3
        assert body["checkpoint"] == body["notifications"][0]["id"]

    def test_since_id_returns_only_newer(self, client, manager, employee):
        _notify(client, manager, employee, title="old")
        first = client.get(f"{API}/notifications", headers=auth_headers(employee)).json()
        checkpoint = first["checkpoint"]

        _notify(client, manager, employee, title="new 1")
        _notify(client, manager, employee, title="new 2")

        later = client.get(
            f"{API}/notifications", params={"since_id": checkpoint}, headers=auth_headers(employee)
        ).json()
        assert [n["title"] for n in later["notifications"]] == ["new 1", "new 2"]

        idle = client.get(
            f"{API}/notifications", params={"since_id": later["checkpoint"]}, headers=auth_headers(employee)
        ).json()
        assert idle["notifications"] == []
        assert idle["checkpoint"] == later["checkpoint"]

    def test_only_own_notifications(self, client, manager, employee, other_employee):
        _notify(client, manager, other_employee)
        body = client.get(f"{API}/notifications", headers=auth_headers(employee)).json()
        assert body["notifications"] == []
        assert body["checkpoint"] is None

    def test_assignment_shows_up(self, client, manager, employee):
        task = create_task(client, manager, employee)
        body = client.get(f"{API}/notifications", headers=auth_headers(employee)).json()
        assert body["notifications"][0]["type"] == "task_assigned"
        assert body["notifications"][0]["related"] == {"kind": "task", "id": task["id"]}


class TestReadState:

    def test_mark_one_read(self, client, manager, employee):
        notification = _notify(client, manager, employee)
        url = f"{API}/notifications/{notification['id']}/read"

        assert client.patch(url, headers=auth_headers(employee)).status_code == 200
        count = client.get(f"{API}/notifications/unread-count", headers=auth_headers(employee)).json()
        assert count == {"unread_count": 0}

        # Already read
        assert client.patch(url, headers=auth_headers(employee)).status_code == 404

    def test_cannot_mark_someone_elses(self, client, manager, employee, other_employee):
        notification = _notify(client, manager, other_employee)
        response = client.patch(
            f"{API}/notifications/{notification['id']}/read", headers=auth_headers(employee)
        )
        assert response.status_code == 404

    def test_mark_all_read(self, client, manager, employee, other_employee):
        _notify(client, manager, employee)
        _notify(client, manager, employee)
        _notify(client, manager, other_employee)

        response = client.patch(f"{API}/notifications/mark-all-read", headers=auth_headers(employee))
        assert response.json() == {"updated_count": 2}

        other = client.get(f"{API}/notifications/unread-count", headers=auth_headers(other_employee)).json()
        assert other["unread_count"] == 1


class TestCreate:

    def test_employees_cannot_create(self, client, employee, other_employee):
        response = client.post(
            f"{API}/notifications",
            json={"user_id": other_employee.id, "type": "task_assigned", "title": "t", "message": "m"},
            headers=auth_headers(employee),
        )
        assert response.status_code == 403

    def test_unknown_recipient(self, client, manager):
        response = client.post(
            f"{API}/notifications",
            json={"user_id": "ghost", "type": "task_assigned", "title": "t", "message": "m"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 422

    def test_related_reference_round_trips(self, client, manager, employee):
        created = _notify(client, manager, employee, related={"kind": "project", "id": 3})
        assert created["related"] == {"kind": "project", "id": 3}
        assert created["is_read"] is False
