"""
Tests for Users API endpoints.
"""

import pytest

from apps.users.models import User, UserRole


@pytest.mark.django_db
class TestRegisterAPI:
    def test_register_success(self, api_client):
        response = api_client.post(
            "/users/register",
            json={
                "username": "new_writer",
                "email": "New@Test.com",
                "password": "Writer123",
                "firstName": "New",
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "new@test.com"
        assert data["role"] == UserRole.AUTHOR
        assert "password" not in data

        user = User.objects.get(username="new_writer")
        assert user.password != "Writer123"
        assert user.check_password("Writer123")

    def test_register_duplicate_email(self, api_client, author_user):
        response = api_client.post(
            "/users/register",
            json={"username": "someone", "email": author_user.email, "password": "Password123"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Email already registered"

    def test_register_duplicate_username(self, api_client, author_user):
        response = api_client.post(
            "/users/register",
            json={"username": "author", "email": "fresh@test.com", "password": "Password123"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Username already taken"

    @pytest.mark.parametrize("password", ["123", "alllowercase1", "NoDigitsHere"])
    def test_register_weak_password(self, api_client, password):
        response = api_client.post(
            "/users/register",
            json={"username": "weakling", "email": "weak@test.com", "password": password},
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("email", ["not-an-email", "a@b..c", "user@"])
    def test_register_invalid_email(self, api_client, email):
        response = api_client.post(
            "/users/register",
            json={"username": "mailer", "email": email, "password": "Password123"},
        )
        assert response.status_code == 422
        assert not User.objects.filter(username="mailer").exists()

    def test_register_bad_username(self, api_client):
        response = api_client.post(
            "/users/register",
            json={"username": "no spaces!", "email": "x@test.com", "password": "Password123"},
        )
        assert response.status_code == 422


@pytest.mark.django_db
class TestProfileAPI:
    def test_get_me(self, api_client, author_headers):
        response = api_client.get("/users/me", headers=author_headers)
        assert response.status_code == 200
        assert response.json()["data"]["username"] == "author"

    def test_get_me_without_token(self, api_client):
        response = api_client.get("/users/me")
        assert response.status_code == 401

    def test_get_me_with_bad_token(self, api_client):
        response = api_client.get("/users/me", headers={"HTTP_AUTHORIZATION": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_inactive_user_is_rejected(self, api_client, author_user, author_headers):
        author_user.is_active = False
        author_user.save()
        response = api_client.get("/users/me", headers=author_headers)
        assert response.status_code == 401

    def test_update_me(self, api_client, author_headers):
        response = api_client.put("/users/me", json={"bio": "Writes things"}, headers=author_headers)
        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Writes things"

    def test_update_me_taken_username(self, api_client, author_headers, other_author):
        response = api_client.put("/users/me", json={"username": "other"}, headers=author_headers)
        assert response.status_code == 400

    def test_update_me_invalid_email(self, api_client, author_headers):
        response = api_client.put("/users/me", json={"email": "nope"}, headers=author_headers)
        assert response.status_code == 422

    def test_update_me_clears_profile_fields(self, api_client, author_user, author_headers):
        author_user.bio = "Old bio"
        author_user.last_name = "Lovelace"
        author_user.save()

        response = api_client.put("/users/me", json={"bio": None, "lastName": None}, headers=author_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bio"] is None
        assert data["lastName"] is None
        assert data["firstName"] == "Ada"

        author_user.refresh_from_db()
        assert author_user.bio is None

    def test_update_me_null_username_is_ignored(self, api_client, author_user, author_headers):
        response = api_client.put("/users/me", json={"username": None}, headers=author_headers)
        assert response.status_code == 200
        author_user.refresh_from_db()
        assert author_user.username == "author"
