"""Endpoint tests for projects and project comments."""

import pytest
from sqlmodel import select

from conftest import API, auth_headers, create_project, create_task, future
from taskhub.models.task import Task


class TestProjectCrud:
    """Create, list, read, update and delete."""

    def test_create_and_read(self, client, manager, employee):
        project = create_project(client, manager, tags=["b", "a"])
        assert project["project_manager"] == manager.id
        assert project["project_manager_name"] == "Maria Manager"
        assert project["tags"] == ["b", "a"]
        assert project["completion_percentage"] == 0
        # Timestamps are stored and returned as naive UTC
        assert not project["created_at"].endswith(("Z", "+00:00"))

        # Everyone can read every project
        fetched = client.get(f"{API}/projects/{project['id']}", headers=auth_headers(employee))
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Website relaunch"

    def test_list_newest_first(self, client, manager, other_manager, employee):
        first = create_project(client, manager, name="first")
        second = create_project(client, other_manager, name="second")
        listed = client.get(f"{API}/projects", headers=auth_headers(employee)).json()
        assert [p["id"] for p in listed] == [second["id"], first["id"]]

    def test_employee_cannot_create(self, client, employee, manager):
        response = client.post(
            f"{API}/projects",
            json={
                "name": "P", "description": "D", "project_manager": manager.id,
                "deadline": future(), "priority": "low",
            },
            headers=auth_headers(employee),
        )
        assert response.status_code == 403

    def test_project_manager_must_be_a_manager(self, client, manager, employee):
        response = client.post(
            f"{API}/projects",
            json={
                "name": "P", "description": "D", "project_manager": employee.id,
                "deadline": future(), "priority": "low",
            },
            headers=auth_headers(manager),
        )
        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["project_manager"]

    def test_create_on_behalf_of_another_manager(self, client, manager, other_manager):
        project = create_project(client, manager, project_manager=other_manager.id)
        assert project["project_manager"] == other_manager.id

    def test_past_deadline(self, client, manager):
        response = client.post(
            f"{API}/projects",
            json={
                "name": "P", "description": "D", "project_manager": manager.id,
                "deadline": future(-2), "priority": "low",
            },
            headers=auth_headers(manager),
        )
        assert response.status_code == 422

    def test_missing_project(self, client, employee):
        assert client.get(f"{API}/projects/404", headers=auth_headers(employee)).status_code == 404


class TestProjectUpdate:

    def test_owner_updates_partially(self, client, manager):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}",
            json={"name": "Relaunch v2", "completion_percentage": 40},
            headers=auth_headers(manager),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Relaunch v2"
        assert body["completion_percentage"] == 40
        assert body["description"] == project["description"]

    def test_put_is_accepted(self, client, manager):
        project = create_project(client, manager)
        response = client.put(
            f"{API}/projects/{project['id']}", json={"priority": "low"}, headers=auth_headers(manager)
        )
        assert response.status_code == 200
        assert response.json()["priority"] == "low"

    def test_non_owner_leaves_project_unchanged(self, client, manager, other_manager):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}", json={"name": "Hijacked"}, headers=auth_headers(other_manager)
        )
        assert response.status_code == 403

        stored = client.get(f"{API}/projects/{project['id']}", headers=auth_headers(manager)).json()
        assert stored["name"] == "Website relaunch"

    def test_employee_cannot_update(self, client, manager, employee):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}", json={"name": "x"}, headers=auth_headers(employee)
        )
        assert response.status_code == 403

    def test_owner_cannot_be_changed(self, client, manager, other_manager):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}",
            json={"project_manager": other_manager.id},
            headers=auth_headers(manager),
        )
        assert response.status_code == 422

    def test_completion_bounds(self, client, manager):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}", json={"completion_percentage": 101}, headers=auth_headers(manager)
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["name", "description", "tags", "deadline", "priority", "completion_percentage"])
    def test_required_fields_cannot_be_cleared(self, client, manager, employee, field):
        project = create_project(client, manager)
        response = client.patch(
            f"{API}/projects/{project['id']}", json={field: None}, headers=auth_headers(manager)
        )
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", field]

        # The stored project is untouched and still listable
        listed = client.get(f"{API}/projects", headers=auth_headers(employee))
        assert listed.status_code == 200
        assert listed.json()[0]["tags"] == ["web", "marketing"]
        assert listed.json()[0]["name"] == "Website relaunch"

    def test_optional_field_can_be_cleared(self, client, manager):
        project = create_project(client, manager, image_url="https://files.taskhub.io/cover.png")
        response = client.patch(
            f"{API}/projects/{project['id']}", json={"image_url": None}, headers=auth_headers(manager)
        )
        assert response.status_code == 200
        assert response.json()["image_url"] is None


class TestProjectDelete:

    def test_delete_detaches_tasks(self, client, session, manager, employee):
        project = create_project(client, manager)
        task = create_task(client, manager, employee, project_id=project["id"])

        response = client.delete(f"{API}/projects/{project['id']}", headers=auth_headers(manager))
        assert response.status_code == 200

        assert client.get(f"{API}/projects/{project['id']}", headers=auth_headers(manager)).status_code == 404
        stored = session.exec(select(Task).where(Task.id == task["id"])).one()
        assert stored.project_id is None

    def test_non_owner_cannot_delete(self, client, manager, other_manager):
        project = create_project(client, manager)
        response = client.delete(f"{API}/projects/{project['id']}", headers=auth_headers(other_manager))
        assert response.status_code == 403
        assert client.get(f"{API}/projects/{project['id']}", headers=auth_headers(manager)).status_code == 200


class TestProjectComments:

    def test_anyone_can_comment(self, client, manager, employee):
        project = create_project(client, manager)
        url = f"{API}/projects/{project['id']}/comments"

        response = client.post(url, json={"content": "Looks good"}, headers=auth_headers(employee))
        assert response.status_code == 201
        assert response.json()["related"] == {"kind": "project", "id": project["id"]}

        comments = client.get(url, headers=auth_headers(manager)).json()
        assert [c["author_id"] for c in comments] == [employee.id]

    def test_missing_project(self, client, employee):
        response = client.post(
            f"{API}/projects/77/comments", json={"content": "hi"}, headers=auth_headers(employee)
        )
        assert response.status_code == 404
