"""Tests for user service."""

import pytest

from book_nest.domain.errors import NotFound, ValidationFailed
from book_nest.services.auth import TokenService
from book_nest.services.users import UserService, profile_payload, public_user
from tests.conftest import InMemoryUserRepository


@pytest.fixture
def service(
    user_repository: InMemoryUserRepository, token_service: TokenService
) -> UserService:
    return UserService(repository=user_repository, tokens=token_service)


def test_register_normalizes_and_issues_token(
    service: UserService, token_service: TokenService
) -> None:
    result = service.register(" alice ", " Alice@X.com ", "Pw1!")

    assert result.user.username == "alice"
    assert result.user.email == "alice@x.com"
    assert result.user.password_hash != "Pw1!"
    assert token_service.verify(result.token).id == result.user.id


@pytest.mark.parametrize(
    ("username", "email"),
    [("alice", "other@x.com"), ("other", "ALICE@x.com")],
)
def test_register_rejects_existing_username_or_email(
    service: UserService, username: str, email: str
) -> None:
    service.register("alice", "alice@x.com", "Pw1!")

    with pytest.raises(ValidationFailed, match="User already exists"):
        service.register(username, email, "Pw1!")


def test_register_requires_all_fields(service: UserService) -> None:
    with pytest.raises(ValidationFailed, match="Please provide"):
        service.register("alice", "", "Pw1!")


def test_login_checks_credentials(service: UserService) -> None:
    registered = service.register("alice", "alice@x.com", "Pw1!")

    result = service.login("ALICE@x.com", "Pw1!")

    assert result.user.id == registered.user.id
    with pytest.raises(ValidationFailed, match="Invalid credentials"):
        service.login("alice@x.com", "nope")
    with pytest.raises(ValidationFailed, match="Invalid credentials"):
        service.login("nobody@x.com", "Pw1!")


def test_update_profile(service: UserService) -> None:
    user = service.register("alice", "alice@x.com", "Pw1!").user

    updated = service.update_profile(
        user.id,
        username="alicia",
        bio="Reader",
        profile_picture="data:image/png;base64,AAAA",
    )

    assert updated.username == "alicia"
    assert profile_payload(updated)["profilePicture"] == "data:image/png;base64,AAAA"
    assert profile_payload(updated)["bio"] == "Reader"


def test_update_profile_rejects_taken_username(service: UserService) -> None:
    service.register("bob", "bob@x.com", "Pw1!")
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    with pytest.raises(ValidationFailed, match="Username is already taken"):
        service.update_profile(alice.id, username="bob")


def test_update_profile_rejects_non_data_uri(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    with pytest.raises(ValidationFailed):
        service.update_profile(alice.id, profile_picture="http://img")


def test_settings_merge(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    service.update_settings(alice.id, {"theme": "dark", "language": "en"})
    merged = service.update_settings(alice.id, {"theme": "light"})

    assert merged == {"theme": "light", "language": "en"}
    assert service.get_settings(alice.id) == merged


def test_change_password(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    with pytest.raises(ValidationFailed, match="Current password is incorrect"):
        service.change_password(alice.id, "wrong", "New1!")
    service.change_password(alice.id, "Pw1!", "New1!")

    assert service.login("alice@x.com", "New1!").user.id == alice.id


def test_delete_account(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    service.delete_account(alice.id)

    with pytest.raises(NotFound):
        service.delete_account(alice.id)


def test_public_user_hides_password(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    assert "password_hash" not in public_user(alice, include_settings=True)
    assert public_user(alice) == {
        "id": str(alice.id),
        "username": "alice",
        "email": "alice@x.com",
    }


def test_update_profile_rejects_blank_username(service: UserService) -> None:
    alice = service.register("alice", "alice@x.com", "Pw1!").user

    with pytest.raises(ValidationFailed, match="Username cannot be empty"):
        service.update_profile(alice.id, username="   ")

    assert service.get_user(alice.id).username == "alice"
