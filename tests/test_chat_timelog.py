"""Endpoint tests for the shared chat room, login records and health."""

from sqlalchemy.exc import OperationalError

from conftest import API, PASSWORD, auth_headers
from taskhub.db.session import get_db
from taskhub.main import app


class TestChat:

    def test_messages_oldest_first(self, client, manager, employee):
        url = f"{API}/chat/messages"
        client.post(url, json={"content": "Morning"}, headers=auth_headers(manager))
        client.post(url, json={"content": "Hi!"}, headers=auth_headers(employee))

        messages = client.get(url, headers=auth_headers(employee)).json()
        assert [m["content"] for m in messages] == ["Morning", "Hi!"]
        assert messages[0]["sender_name"] == "Maria Manager"
        assert messages[0]["sender_role"] == "project_manager"

    def test_limit_keeps_latest(self, client, employee):
        url = f"{API}/chat/messages"
        for text in ("a", "b", "c"):
            client.post(url, json={"content": text}, headers=auth_headers(employee))

        messages = client.get(url, params={"limit": 2}, headers=auth_headers(employee)).json()
        assert [m["content"] for m in messages] == ["b", "c"]

    def test_attachments(self, client, employee, manager):
        message = client.post(
            f"{API}/chat/messages", json={"content": "See file"}, headers=auth_headers(employee)
        ).json()
        url = f"{API}/chat/messages/{message['id']}/attachments"
        file_body = {
            "file_name": "notes.txt",
            "file_url": "https://files.taskhub.io/notes.txt",
            "file_size": 12,
            "mime_type": "text/plain",
        }

        assert client.post(url, json=file_body, headers=auth_headers(employee)).status_code == 201
        files = client.get(url, headers=auth_headers(manager)).json()
        assert [f["file_name"] for f in files] == ["notes.txt"]

    def test_attachment_on_missing_message(self, client, employee):
        response = client.get(f"{API}/chat/messages/99/attachments", headers=auth_headers(employee))
        assert response.status_code == 404

    def test_requires_authentication(self, client):
        assert client.get(f"{API}/chat/messages").status_code == 401


class TestTimeLog:

    def test_all_logs_for_managers(self, client, manager, employee):
        for user in (manager, employee):
            client.post(f"{API}/auth/login", data={"username": user.email, "password": PASSWORD})

        assert client.get(f"{API}/timelog/all", headers=auth_headers(employee)).status_code == 403

        logs = client.get(f"{API}/timelog/all", headers=auth_headers(manager)).json()
        assert {log["user_id"] for log in logs} == {manager.id, employee.id}

        own = client.get(f"{API}/timelog/user", headers=auth_headers(employee)).json()
        assert [log["user_id"] for log in own] == [employee.id]


class TestHealth:

    def test_ok(self, client):
        assert client.get(f"{API}/health").json() == {"status": "ok", "database": "ok"}

    def test_database_down_is_503(self, client):
        class DeadSession:
            def exec(self, statement):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        def get_dead_db():
            yield DeadSession()

        app.dependency_overrides[get_db] = get_dead_db
        response = client.get(f"{API}/health")
        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "upstream_unavailable"
