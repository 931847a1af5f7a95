from blog_api.core.security import create_refresh_token
from tests.conftest import PASSWORD
from tests.helpers import auth_headers


async def test_register_returns_tokens(client):
    response = await client.post(
        "/auth/register", json={"name": "New User", "email": "New@Example.com", "password": "secret-pass"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "new@example.com"

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["name"] == "New User"


async def test_register_rejects_duplicate_email(client, author):
    response = await client.post(
        "/auth/register", json={"name": "Again", "email": "author@example.com", "password": "secret-pass"}
    )

    assert response.status_code == 400


async def test_register_validates_fields(client):
    response = await client.post("/auth/register", json={"name": "", "email": "nope", "password": "short"})

    assert response.status_code == 422
    assert set(response.json()["errors"]) == {"name", "email", "password"}


async def test_login_with_valid_credentials(client, author):
    response = await client.post("/auth/login", json={"email": "author@example.com", "password": PASSWORD})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(author.id)


async def test_login_with_wrong_password(client, author):
    response = await client.post("/auth/login", json={"email": "author@example.com", "password": "wrong-password"})

    assert response.status_code == 401


async def test_refresh_issues_new_tokens(client, author):
    response = await client.post("/auth/refresh", json={"refresh_token": create_refresh_token(author.id)})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(author.id)


async def test_access_token_cannot_be_used_to_refresh(client, author):
    access = auth_headers(author)["Authorization"].split()[1]

    response = await client.post("/auth/refresh", json={"refresh_token": access})

    assert response.status_code == 401


async def test_me_requires_authentication(client):
    response = await client.get("/auth/me")

    assert response.status_code == 401


async def test_token_created_post_belongs_to_registered_user(client):
    tokens = (
        await client.post(
            "/auth/register", json={"name": "Writer", "email": "writer@example.com", "password": "secret-pass"}
        )
    ).json()
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    created = await client.post("/posts", json={"title": "First", "content": "Hello"}, headers=headers)

    assert created.status_code == 201
    assert created.json()["user"]["name"] == "Writer"
