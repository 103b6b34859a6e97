import logging
from http import HTTPStatus

from dtos import UserDto
from errors import AuthenticationFailure, ErrorCollector, ErrorModel, NotFoundFailure
from models import User

logger = logging.getLogger(__name__)


def user_to_dto(user):
    # password is write-only
    return UserDto(id=user.id, username=user.username, name=user.name)


def dto_to_user(user_dto):
    return User(id=user_dto.id, username=user_dto.username, name=user_dto.name,
                password=user_dto.password)


def apply_user_changes(user, user_dto):
    """Copy the mutable fields of the DTO onto a stored user; id, username and password stay."""
    user.name = user_dto.name
    return user


class UserController:
    def __init__(self, user_service, encoder):
        self.user_service = user_service
        self.encoder = encoder

    def register(self, user_dto):
        user_dto.id = None
        self.validate_user(user_dto, is_update=False)

        user = dto_to_user(user_dto)
        user.password = self.encoder.encode(user.password)
        new_user = self.user_service.create_user(user)
        logger.info("Registered user id=%s username=%s", new_user.id, new_user.username)
        return user_to_dto(new_user)

    def update(self, user_dto):
        user_dto.password = None
        self.validate_user(user_dto, is_update=True)

        user = self.user_service.get_user_by_id(user_dto.id)
        edited_user = self.user_service.update_user(apply_user_changes(user, user_dto))
        logger.info("Updated user id=%s", edited_user.id)
        return user_to_dto(edited_user)

    def login(self, login_dto):
        user = self.user_service.authenticate(login_dto)
        if user is not None:
            return user_to_dto(user)
        logger.info("Failed login for username=%s", login_dto.username)
        raise AuthenticationFailure("Username or password are not valid!")

    def get_all(self):
        return [user_to_dto(u) for u in self.user_service.get_all_users()]

    def get_by_id(self, user_id):
        user = self.user_service.get_user_by_id(user_id)
        if user is not None:
            return user_to_dto(user)
        raise NotFoundFailure(
            ErrorModel(HTTPStatus.NOT_FOUND, "There isn't a user with this Id!"),
            f"No user with id={user_id}",
        )

    def change_password(self, password_dto):
        user = self.user_service.get_user_by_id(password_dto.user_id)
        self.validate_password(password_dto, user)

        changed = self.user_service.change_password(user, password_dto.new_password)
        logger.info("Password changed for user id=%s", user.id)
        return changed

    def validate_user(self, user_dto, is_update):
        errors = ErrorCollector()
        if is_update and self.user_service.get_user_by_id(user_dto.id) is None:
            errors.add('Id', "Id is not valid!")

        taken = self.user_service.username_exists(user_dto.username)
        if not is_update and taken:
            errors.add('username', f"There is an account with that username: {user_dto.username}")
        if is_update and not taken:
            errors.add('username', "This username doesn't exist!")

        errors.raise_if_any("Validation errors", "Validation error in UserController.validate_user()")

    def validate_password(self, password_dto, user):
        errors = ErrorCollector()
        if user is None:
            errors.add('UserId', "User does not exist!")
        if password_dto.new_password != password_dto.repeated_new_password:
            errors.add('NewPassword', "The new password does not match the repeated one!")
        if user is not None and not self.user_service.check_if_valid_old_password(user, password_dto.old_password):
            errors.add('oldPassword', "Old password is incorrect!")

        errors.raise_if_any("Change Password Errors", "Validation error in UserController.validate_password()")
