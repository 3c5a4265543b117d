from unittest.mock import patch

from conftest import JSON, auth_headers
from projectbook.models import Project
from projectbook.services import project_service


# index

def test_index_as_authenticated_user(client, user, project):
    response = client.get("/projects", headers=auth_headers(user))
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [project.id]


def test_index_as_guest_redirects_to_sign_in(client):
    response = client.get("/projects")
    assert response.status_code == 302
    assert response.headers["location"] == "/users/sign_in"


def test_index_as_json_guest_is_unauthorized(client):
    assert client.get("/projects", headers=JSON).status_code == 401


# show

def test_show_as_owner(client, user, project):
    response = client.get(f"/projects/{project.id}", headers=auth_headers(user))
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == project.name
    assert body["tasks"] == []
    assert body["notes"] == []


def test_show_as_other_user_redirects_to_dashboard(client, project, user_factory):
    response = client.get(f"/projects/{project.id}", headers=auth_headers(user_factory()))
    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert response.headers["x-flash-alert"] == "You don't have access to that project."


def test_show_missing_project(client, user):
    response = client.get("/projects/nope", headers=auth_headers(user))
    assert response.status_code == 404


# create

def test_create_adds_project(client, db, user):
    response = client.post(
        "/projects", json={"name": "New project"}, headers=auth_headers(user)
    )
    assert response.status_code == 201
    assert db.query(Project).filter(Project.owner_id == user.id).count() == 1


def test_create_with_invalid_attributes_adds_nothing(client, db, user):
    response = client.post("/projects", json={"name": None}, headers=auth_headers(user))
    assert response.status_code == 422
    assert response.json()["errors"] == {"name": ["can't be blank"]}
    assert db.query(Project).filter(Project.owner_id == user.id).count() == 0


def test_create_as_guest_redirects_to_sign_in(client, db):
    response = client.post("/projects", json={"name": "New project"})
    assert response.status_code == 302
    assert response.headers["location"] == "/users/sign_in"
    assert db.query(Project).count() == 0


# update

def test_update_as_owner(client, db, user, project):
    response = client.patch(
        f"/projects/{project.id}", json={"name": "New Project Name"}, headers=auth_headers(user)
    )
    assert response.status_code == 200
    db.refresh(project)
    assert project.name == "New Project Name"


def test_update_as_other_user_keeps_name(client, db, project_factory, user_factory):
    project = project_factory(name="Same Old Name")

    response = client.patch(
        f"/projects/{project.id}", json={"name": "New Name"}, headers=auth_headers(user_factory())
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    db.refresh(project)
    assert project.name == "Same Old Name"


def test_update_cannot_set_completed(client, db, user, project):
    client.patch(f"/projects/{project.id}", json={"completed": True}, headers=auth_headers(user))
    db.refresh(project)
    assert project.completed is None


# destroy

def test_destroy_as_owner(client, db, user, project):
    response = client.delete(f"/projects/{project.id}", headers=auth_headers(user))
    assert response.status_code == 204
    assert db.query(Project).filter(Project.owner_id == user.id).count() == 0


def test_destroy_as_other_user(client, db, project, user_factory):
    response = client.delete(f"/projects/{project.id}", headers=auth_headers(user_factory()))
    assert response.status_code == 302
    assert response.headers["location"] == "/"
    assert db.query(Project).count() == 1


def test_destroy_as_guest(client, db, project):
    response = client.delete(f"/projects/{project.id}")
    assert response.status_code == 302
    assert response.headers["location"] == "/users/sign_in"
    assert db.query(Project).count() == 1


def test_destroy_as_json_other_user_is_forbidden(client, db, project, user_factory):
    response = client.delete(f"/projects/{project.id}", headers=auth_headers(user_factory(), **JSON))
    assert response.status_code == 403
    assert db.query(Project).count() == 1


# complete

def test_complete_as_owner(client, db, user, project):
    response = client.patch(f"/projects/{project.id}/complete", headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json()["completed"] is True


def test_failed_complete_redirects_back_to_project(client, db, user, project):
    with patch.object(project_service, "_mark_completed", return_value=False):
        response = client.patch(f"/projects/{project.id}/complete", headers=auth_headers(user))

    assert response.status_code == 302
    assert response.headers["location"] == f"/projects/{project.id}"
    assert response.headers["x-flash-alert"] == "Unable to complete project."
    db.refresh(project)
    assert project.completed is None


def test_failed_complete_as_json(client, user, project):
    with patch.object(project_service, "_mark_completed", return_value=False):
        response = client.patch(
            f"/projects/{project.id}/complete", headers=auth_headers(user, **JSON)
        )

    assert response.status_code == 422
    assert response.json() == {"detail": "Unable to complete project."}


# landing

def test_dashboard_lists_own_projects(client, user, project):
    response = client.get("/", headers=auth_headers(user))
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["projects"]] == [project.id]


def test_dashboard_for_guest(client):
    assert client.get("/").json()["projects"] == []
