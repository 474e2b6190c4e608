"""API tests for /api/users."""

from datetime import datetime

import pytest

from grouphub.core.rbac import Role
from grouphub.db.models import User

BASE_URL = "/api/users"


@pytest.fixture
def admin(user_factory):
    return user_factory(role=Role.ADMIN)


def user_payload(**overrides):
    payload = {"name": "Anabela", "email": "ana@example.com", "type_user_id": Role.MEMBER.value}
    payload.update(overrides)
    return payload


class TestListUsers:

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.MANAGER, Role.REPRESENTATIVE])
    def test_allowed_roles(self, client, user_factory, auth_headers, role):
        actor = user_factory(role=role)
        response = client.get(BASE_URL, headers=auth_headers(actor))

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["email"] == actor.email
        assert body["data"][0]["type_user"]["id"] == role.value
        assert {"page", "per_page", "pages"} <= set(body)

    @pytest.mark.parametrize("role", [Role.MEMBER, Role.VIEWER])
    def test_denied_roles(self, client, user_factory, auth_headers, role):
        response = client.get(BASE_URL, headers=auth_headers(user_factory(role=role)))

        assert response.status_code == 403
        assert response.json() == {"errors": "This action is unauthorized."}

    def test_filter_by_email(self, client, admin, user_factory, auth_headers):
        target = user_factory(email="target@example.com")
        response = client.get(BASE_URL, params={"email": "target@example.com"}, headers=auth_headers(admin))
        assert [u["id"] for u in response.json()["data"]] == [target.id]

    def test_requires_authentication(self, client):
        response = client.get(BASE_URL)
        assert response.status_code == 401
        assert response.json() == {"errors": "Unauthenticated."}

    def test_deleted_user_cannot_authenticate(self, client, user_factory, auth_headers):
        ghost = user_factory(role=Role.ADMIN, deleted_at=datetime.utcnow())
        assert client.get(BASE_URL, headers=auth_headers(ghost)).status_code == 401


class TestCreateUser:

    def test_admin_creates_user(self, client, admin, auth_headers, db_session):
        response = client.post(BASE_URL, json=user_payload(), headers=auth_headers(admin))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Anabela"
        assert data["type_user_id"] == Role.MEMBER.value
        assert "password_hash" not in data
        assert db_session.query(User).filter(User.email == "ana@example.com").count() == 1

    def test_manager_cannot_create(self, client, user_factory, auth_headers):
        manager = user_factory(role=Role.MANAGER)
        response = client.post(BASE_URL, json=user_payload(), headers=auth_headers(manager))
        assert response.status_code == 403

    def test_short_name(self, client, admin, auth_headers):
        response = client.post(BASE_URL, json=user_payload(name="Ana"), headers=auth_headers(admin))
        assert response.status_code == 422
        assert response.json() == {
            "errors": {"name": ["O campo nome deve ter no mínimo 4 caracteres."]}
        }

    def test_duplicate_email(self, client, admin, user_factory, auth_headers):
        user_factory(email="ana@example.com")
        response = client.post(BASE_URL, json=user_payload(), headers=auth_headers(admin))
        assert response.status_code == 422
        assert response.json()["errors"]["email"] == ["Esse e-mail ja esta cadastrado"]

    def test_invalid_json(self, client, admin, auth_headers):
        headers = {**auth_headers(admin), "Content-Type": "application/json"}
        response = client.post(BASE_URL, content="{not json", headers=headers)
        assert response.status_code == 422
        assert isinstance(response.json()["errors"], dict)


class TestShowUser:

    def test_any_authenticated_user(self, client, user_factory, auth_headers):
        viewer = user_factory(role=Role.VIEWER)
        other = user_factory()
        response = client.get(f"{BASE_URL}/{other.id}", headers=auth_headers(viewer))
        assert response.status_code == 200
        assert response.json()["data"]["id"] == other.id

    def test_not_found(self, client, admin, auth_headers):
        response = client.get(f"{BASE_URL}/999", headers=auth_headers(admin))
        assert response.status_code == 404
        assert response.json() == {"errors": "Usuário não encontrado"}


class TestUpdateUser:

    def test_update_self(self, client, user_factory, auth_headers):
        user = user_factory(role=Role.VIEWER)
        response = client.put(
            f"{BASE_URL}/{user.id}", json={"name": "Nome Novo"}, headers=auth_headers(user)
        )
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Nome Novo"

    def test_resubmitting_own_email(self, client, user_factory, auth_headers):
        user = user_factory(email="me@example.com")
        response = client.put(
            f"{BASE_URL}/{user.id}", json={"email": "me@example.com"}, headers=auth_headers(user)
        )
        assert response.status_code == 200

    def test_taking_another_users_email(self, client, user_factory, auth_headers):
        user_factory(email="taken@example.com")
        user = user_factory()
        response = client.put(
            f"{BASE_URL}/{user.id}", json={"email": "taken@example.com"}, headers=auth_headers(user)
        )
        assert response.status_code == 422

    def test_admin_cannot_update_others(self, client, admin, user_factory, auth_headers):
        other = user_factory()
        response = client.put(
            f"{BASE_URL}/{other.id}", json={"name": "Nome Novo"}, headers=auth_headers(admin)
        )
        assert response.status_code == 403
        assert response.json() == {"errors": "This action is unauthorized."}

    def test_type_user_id_is_prohibited(self, client, user_factory, auth_headers):
        user = user_factory()
        response = client.put(
            f"{BASE_URL}/{user.id}", json={"type_user_id": Role.ADMIN.value}, headers=auth_headers(user)
        )
        assert response.status_code == 422
        assert response.json() == {
            "errors": {"type_user_id": ["Esse campo não pode ser atualizado"]}
        }


class TestDeleteAndRestore:

    def test_admin_deletes_and_restores(self, client, admin, user_factory, auth_headers):
        user = user_factory()
        headers = auth_headers(admin)

        assert client.delete(f"{BASE_URL}/{user.id}", headers=headers).status_code == 204
        assert client.get(f"{BASE_URL}/{user.id}", headers=headers).status_code == 404

        response = client.patch(f"{BASE_URL}/restore/{user.id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["deleted_at"] is None
        assert client.get(f"{BASE_URL}/{user.id}", headers=headers).status_code == 200

    @pytest.mark.parametrize("role", [Role.MANAGER, Role.REPRESENTATIVE, Role.MEMBER, Role.VIEWER])
    def test_only_admin_deletes(self, client, user_factory, auth_headers, role):
        user = user_factory()
        response = client.delete(f"{BASE_URL}/{user.id}", headers=auth_headers(user_factory(role=role)))
        assert response.status_code == 403

    def test_only_admin_restores(self, client, user_factory, auth_headers):
        user = user_factory()
        manager = user_factory(role=Role.MANAGER)
        response = client.patch(f"{BASE_URL}/restore/{user.id}", headers=auth_headers(manager))
        assert response.status_code == 403

    def test_delete_unknown_user(self, client, admin, auth_headers):
        assert client.delete(f"{BASE_URL}/999", headers=auth_headers(admin)).status_code == 404
