import pytest

from conftest import JSON, auth_headers
from projectbook.models import Task
from projectbook.services import task_service


@pytest.fixture()
def task(db, user, project):
    return task_service.create_task(db, user, project.id, {"name": "Test task"})


def _task_count(db, project):
    return db.query(Task).filter(Task.project_id == project.id).count()


def test_show_responds_with_json(client, user, project, task):
    response = client.get(
        f"/projects/{project.id}/tasks/{task.id}", headers=auth_headers(user, **JSON)
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json()["name"] == "Test task"


def test_create_responds_with_json(client, user, project):
    response = client.post(
        f"/projects/{project.id}/tasks",
        json={"name": "New test task"},
        headers=auth_headers(user, **JSON),
    )
    assert response.status_code == 201
    assert response.headers["content-type"] == "application/json"


def test_create_adds_task_to_project(client, db, user, project):
    before = _task_count(db, project)
    client.post(
        f"/projects/{project.id}/tasks", json={"name": "New test task"}, headers=auth_headers(user)
    )
    assert _task_count(db, project) == before + 1


def test_create_requires_authentication(client, db, project):
    response = client.post(
        f"/projects/{project.id}/tasks", json={"name": "New test task"}, headers=JSON
    )
    assert response.status_code == 401
    assert _task_count(db, project) == 0


def test_create_as_other_user(client, db, project, user_factory):
    response = client.post(
        f"/projects/{project.id}/tasks",
        json={"name": "New test task"},
        headers=auth_headers(user_factory(), **JSON),
    )
    assert response.status_code == 403
    assert _task_count(db, project) == 0


def test_create_without_name(client, db, user, project):
    response = client.post(f"/projects/{project.id}/tasks", json={}, headers=auth_headers(user))
    assert response.status_code == 422
    assert response.json()["errors"] == {"name": ["can't be blank"]}


def test_task_from_another_project_is_not_found(client, user, project, project_factory, db):
    other = project_factory(owner=user)
    task = task_service.create_task(db, user, other.id, {"name": "Elsewhere"})

    response = client.get(f"/projects/{project.id}/tasks/{task.id}", headers=auth_headers(user))
    assert response.status_code == 404


def test_update_task(client, db, user, project, task):
    response = client.patch(
        f"/projects/{project.id}/tasks/{task.id}",
        json={"completed": True},
        headers=auth_headers(user),
    )
    assert response.status_code == 200
    db.refresh(task)
    assert task.completed is True
    assert task.name == "Test task"


def test_list_and_destroy_task(client, db, user, project, task):
    listing = client.get(f"/projects/{project.id}/tasks", headers=auth_headers(user))
    assert [t["id"] for t in listing.json()] == [task.id]

    response = client.delete(f"/projects/{project.id}/tasks/{task.id}", headers=auth_headers(user))
    assert response.status_code == 204
    assert _task_count(db, project) == 0
