"""Tests for the user feature.
Covers: UserService, registration and profile update endpoints.
"""

from datetime import timedelta

import pytest
from fastapi import status

from src.config.settings import settings
from src.features.auth.hashing import verify_password
from src.features.auth.jwt_utils import create_access_token
from src.features.user.exceptions import EmailAlreadyExists
from src.features.user.schemas import UserRegisterRequest, UserUpdateRequest
from src.features.user.service import UserService


def bearer_for(user) -> dict[str, str]:
    token = create_access_token(user.id, settings.secret_key, timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


# UserService


class TestUserServiceRegistration:
    async def test_register_user_success(self, session):
        data = UserRegisterRequest(email="newuser@example.com", nickname="newbie", password="SecurePass123!")
        user = await UserService.register_user(session, data)

        assert user.id is not None
        assert user.email == "newuser@example.com"
        assert user.nickname == "newbie"
        assert user.hashed_password != "SecurePass123!"
        verify_password(user.hashed_password, "SecurePass123!")

    async def test_register_user_duplicate_email(self, session, make_user):
        await make_user(email="taken@example.com")

        data = UserRegisterRequest(email="taken@example.com", nickname="other", password="Pass123!")
        with pytest.raises(EmailAlreadyExists):
            await UserService.register_user(session, data)


class TestUserServiceLookup:
    async def test_get_user(self, session, make_user):
        user = await make_user()
        assert (await UserService.get_user(session, user.id)).email == user.email

    async def test_get_user_by_email(self, session, make_user):
        user = await make_user(email="find@example.com")
        assert (await UserService.get_user_by_email(session, "find@example.com")).id == user.id

    async def test_get_user_by_unknown_email(self, session):
        assert await UserService.get_user_by_email(session, "ghost@example.com") is None


class TestUserServiceUpdate:
    async def test_update_only_given_fields(self, session, make_user):
        user = await make_user(email="keep@example.com", nickname="before")
        old_hash = user.hashed_password

        await UserService.update_user(session, user, UserUpdateRequest(nickname="after"))

        assert user.nickname == "after"
        assert user.email == "keep@example.com"
        assert user.hashed_password == old_hash

    async def test_update_password_rehashes(self, session, make_user):
        user = await make_user(password="OldPass123!")

        await UserService.update_user(session, user, UserUpdateRequest(password="NewPass123!"))

        verify_password(user.hashed_password, "NewPass123!")

    async def test_update_to_taken_email_fails(self, session, make_user):
        await make_user(email="first@example.com")
        second = await make_user(email="second@example.com")

        with pytest.raises(EmailAlreadyExists):
            await UserService.update_user(session, second, UserUpdateRequest(email="first@example.com"))


# POST {api_prefix}/users


class TestRegisterEndpoint:
    async def test_register_returns_201(self, client):
        response = await client.post(
            f"{settings.api_prefix}/users",
            json={"email": "http@example.com", "nickname": "httpnick", "password": "Pass123!"},
        )
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["email"] == "http@example.com"
        assert body["nickname"] == "httpnick"
        assert "id" in body
        assert "hashed_password" not in body
        assert "password" not in body

    async def test_register_duplicate_email_returns_422(self, client, make_user):
        await make_user(email="dupe@example.com")
        response = await client.post(
            f"{settings.api_prefix}/users",
            json={"email": "dupe@example.com", "nickname": "dupe", "password": "Pass123!"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["detail"] == "User with this email already exists"

    @pytest.mark.parametrize("missing", ["email", "nickname", "password"])
    async def test_register_requires_all_fields(self, client, missing):
        payload = {"email": "x@example.com", "nickname": "x", "password": "Pass123!"}
        del payload[missing]
        response = await client.post(f"{settings.api_prefix}/users", json=payload)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    async def test_registered_user_can_login(self, client):
        await client.post(
            f"{settings.api_prefix}/users",
            json={"email": "flow@example.com", "nickname": "flow", "password": "Pass123!"},
        )
        response = await client.post(
            f"{settings.api_prefix}/login",
            json={"email": "flow@example.com", "password": "Pass123!"},
        )
        assert response.status_code == status.HTTP_200_OK


# GET/PUT {api_prefix}/users


class TestCurrentUserEndpoint:
    async def test_get_me(self, auth_client):
        client, user = auth_client
        response = await client.get(f"{settings.api_prefix}/users/me")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == user.email


class TestUpdateUserEndpoint:
    async def test_update_own_profile(self, client, make_user):
        user = await make_user(nickname="old")
        response = await client.put(
            f"{settings.api_prefix}/users/{user.id}",
            json={"nickname": "new"},
            headers=bearer_for(user),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["nickname"] == "new"
        assert response.json()["email"] == user.email

    async def test_update_password_then_login(self, client, make_user):
        user = await make_user(email="pw@example.com", password="OldPass123!")
        await client.put(
            f"{settings.api_prefix}/users/{user.id}",
            json={"password": "NewPass123!"},
            headers=bearer_for(user),
        )

        old = await client.post(
            f"{settings.api_prefix}/login", json={"email": "pw@example.com", "password": "OldPass123!"}
        )
        new = await client.post(
            f"{settings.api_prefix}/login", json={"email": "pw@example.com", "password": "NewPass123!"}
        )
        assert old.status_code == status.HTTP_401_UNAUTHORIZED
        assert new.status_code == status.HTTP_200_OK

    async def test_cannot_update_other_user(self, client, make_user):
        me = await make_user()
        other = await make_user()
        response = await client.put(
            f"{settings.api_prefix}/users/{other.id}",
            json={"nickname": "hijacked"},
            headers=bearer_for(me),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_update_requires_authentication(self, client, make_user):
        user = await make_user()
        response = await client.put(f"{settings.api_prefix}/users/{user.id}", json={"nickname": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
