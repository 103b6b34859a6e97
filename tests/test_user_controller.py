# tests/test_user_controller.py

from __future__ import annotations

import pytest

from dtos import LoginDto, NewPasswordDto, UserDto
from errors import AuthenticationFailure, NotFoundFailure, ValidationFailure


def test_register_hashes_password(users, user_service, encoder) -> None:
    created = users.register(UserDto(username="carol", name="Carol", password="hunter2"))

    stored = user_service.get_user_by_id(created.id)
    assert stored.password != "hunter2"
    assert encoder.matches("hunter2", stored.password)
    assert created.password is None


def test_register_ignores_client_id(users, user_service) -> None:
    created = users.register(UserDto(id=42, username="dave", password="pw"))

    assert created.id != 42
    assert user_service.get_user_by_id(42) is None


def test_register_duplicate_username_fails(users, alice) -> None:
    with pytest.raises(ValidationFailure) as exc:
        users.register(UserDto(username="alice", password="other"))

    assert exc.value.fields == ["username"]
    assert "alice" in exc.value.error_model.sub_errors[0].message


def test_update_only_changes_display_name(users, user_service, alice) -> None:
    users.register(UserDto(username="bob", password="pw"))
    before = user_service.get_user_by_id(alice.id)
    old_hash = before.password

    updated = users.update(
        UserDto(id=alice.id, username="bob", name="Alice Liddell", password="ignored")
    )

    after = user_service.get_user_by_id(alice.id)
    assert updated.id == alice.id
    assert updated.username == "alice"
    assert updated.name == "Alice Liddell"
    assert after.username == "alice"
    assert after.password == old_hash


def test_update_unknown_user_reports_id_and_username(users) -> None:
    with pytest.raises(ValidationFailure) as exc:
        users.update(UserDto(id=999, username="ghost", name="Ghost"))

    assert exc.value.fields == ["Id", "username"]


def test_login_success_returns_user_without_password(users, alice) -> None:
    logged_in = users.login(LoginDto(username="alice", password="s3cret"))

    assert logged_in.id == alice.id
    assert logged_in.password is None


@pytest.mark.parametrize("username,password", [("alice", "wrong"), ("nobody", "s3cret")])
def test_login_failure_is_authentication_error(users, alice, username, password) -> None:
    with pytest.raises(AuthenticationFailure) as exc:
        users.login(LoginDto(username=username, password=password))

    assert not isinstance(exc.value, ValidationFailure)
    assert exc.value.error_model.sub_errors == []


def test_get_all_and_get_by_id(users, alice) -> None:
    bob = users.register(UserDto(username="bob", password="pw"))

    assert {u.username for u in users.get_all()} == {"alice", "bob"}
    assert users.get_by_id(bob.id).username == "bob"


def test_get_unknown_user_is_not_found(users) -> None:
    with pytest.raises(NotFoundFailure) as exc:
        users.get_by_id(999)

    assert exc.value.error_model.message == "There isn't a user with this Id!"


def test_change_password_mismatch_with_correct_old_password(users, alice) -> None:
    dto = NewPasswordDto(
        user_id=alice.id, old_password="s3cret", new_password="a", repeated_new_password="b"
    )
    with pytest.raises(ValidationFailure) as exc:
        users.change_password(dto)

    assert exc.value.fields == ["NewPassword"]
    assert exc.value.error_model.message == "Change Password Errors"


def test_change_password_wrong_old_password(users, alice) -> None:
    dto = NewPasswordDto(
        user_id=alice.id, old_password="nope", new_password="n3w", repeated_new_password="n3w"
    )
    with pytest.raises(ValidationFailure) as exc:
        users.change_password(dto)

    assert exc.value.fields == ["oldPassword"]


def test_change_password_unknown_user_accumulates(users) -> None:
    dto = NewPasswordDto(
        user_id=999, old_password="x", new_password="a", repeated_new_password="b"
    )
    with pytest.raises(ValidationFailure) as exc:
        users.change_password(dto)

    assert exc.value.fields == ["UserId", "NewPassword"]


def test_change_password_success(users, alice) -> None:
    dto = NewPasswordDto(
        user_id=alice.id, old_password="s3cret", new_password="n3w", repeated_new_password="n3w"
    )

    assert users.change_password(dto) is True
    assert users.login(LoginDto(username="alice", password="n3w")).id == alice.id
    with pytest.raises(AuthenticationFailure):
        users.login(LoginDto(username="alice", password="s3cret"))
