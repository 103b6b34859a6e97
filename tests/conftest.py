# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from app import create_app
from dtos import UserDto
from services import PasswordEncoder, TaskService, UserService
from task_controller import TaskController
from user_controller import UserController

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    # keep hashing cheap in tests
    "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
}


class FakeClock:
    """Callable clock returning a fixed time until advanced."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def app():
    return create_app(TEST_CONFIG)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 9, 30))


@pytest.fixture()
def encoder() -> PasswordEncoder:
    return PasswordEncoder(TEST_CONFIG["PASSWORD_HASH_METHOD"])


@pytest.fixture()
def user_service(encoder: PasswordEncoder) -> UserService:
    return UserService(encoder)


@pytest.fixture()
def task_service() -> TaskService:
    return TaskService()


@pytest.fixture()
def users(app_ctx, user_service: UserService, encoder: PasswordEncoder) -> UserController:
    return UserController(user_service, encoder)


@pytest.fixture()
def tasks(app_ctx, task_service: TaskService, user_service: UserService, clock: FakeClock) -> TaskController:
    return TaskController(task_service, user_service, clock)


@pytest.fixture()
def alice(users: UserController) -> UserDto:
    return users.register(UserDto(username="alice", name="Alice", password="s3cret"))
