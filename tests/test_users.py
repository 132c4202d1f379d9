from tests.conftest import API


def test_list_users_hides_passwords(client, make_user):
    _, headers = make_user()
    make_user(name="Bia", email="bia@x.com")

    response = client.get(API, headers=headers)

    assert response.status_code == 200
    users = response.json()
    assert [u["email"] for u in users] == ["ana@x.com", "bia@x.com"]
    assert all("password" not in u for u in users)


def test_get_user(client, make_user):
    user_id, headers = make_user()

    response = client.get(f"{API}/{user_id}", headers=headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Ana"
    assert "created_at" in response.json()


def test_get_missing_user(client, make_user):
    _, headers = make_user()
    assert client.get(f"{API}/999", headers=headers).status_code == 404


def test_update_own_profile(client, make_user):
    user_id, headers = make_user()

    response = client.put(
        f"{API}/{user_id}", json={"name": "Ana Maria", "email": "anam@x.com"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "id": user_id,
        "name": "Ana Maria",
        "email": "anam@x.com",
        "role": "student",
    }


def test_update_other_profile_forbidden(client, make_user):
    _, headers = make_user()
    other_id, _ = make_user(name="Bia", email="bia@x.com")

    response = client.put(
        f"{API}/{other_id}", json={"name": "Hacked", "email": "h@x.com"}, headers=headers
    )
    assert response.status_code == 403


def test_update_profile_requires_fields(client, make_user):
    user_id, headers = make_user()

    response = client.put(f"{API}/{user_id}", json={"name": "Ana"}, headers=headers)
    assert response.status_code == 400


def test_update_profile_duplicate_email(client, make_user):
    user_id, headers = make_user()
    make_user(name="Bia", email="bia@x.com")

    response = client.put(
        f"{API}/{user_id}", json={"name": "Ana", "email": "bia@x.com"}, headers=headers
    )
    assert response.status_code == 400


def test_delete_own_account(client, make_user):
    user_id, headers = make_user()

    response = client.delete(f"{API}/{user_id}", headers=headers)
    assert response.status_code == 200

    # token stays valid until expiry, the user does not
    assert client.get(f"{API}/{user_id}", headers=headers).status_code == 404


def test_delete_other_account_forbidden(client, make_user):
    _, headers = make_user()
    other_id, _ = make_user(name="Bia", email="bia@x.com")

    assert client.delete(f"{API}/{other_id}", headers=headers).status_code == 403


def test_delete_account_removes_managed_projects(client, make_user, make_project):
    manager_id, manager = make_user()
    _, student = make_user(name="Bia", email="bia@x.com")
    project = make_project(manager)
    client.post(f"{API}/projects/join", json={"code": project["join_code"]}, headers=student)

    assert client.delete(f"{API}/{manager_id}", headers=manager).status_code == 200

    assert client.get(f"{API}/projects", headers=student).json() == []


def test_update_profile_without_body(client, make_user):
    user_id, headers = make_user()
    assert client.put(f"{API}/{user_id}", headers=headers).status_code == 400
