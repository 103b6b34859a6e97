"""
Transfer objects: the wire shape of users and tasks.

A DTO lives for one request. The *Request subclasses mark the fields each
operation requires. from_json() validates a raw JSON body and reports every
problem at once as a ValidationFailure; to_json() renders the response body
(UserDto never renders its password).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime, ValidationError, field_validator

from errors import ErrorCollector


def _not_blank(value):
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, strict=True)

    @classmethod
    def from_json(cls, raw):
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            errors = ErrorCollector()
            for err in e.errors():
                # errors without a location concern the body as a whole
                name = str(err['loc'][0]) if err['loc'] else 'body'
                message = f"{name} is required" if err['type'] == 'missing' else err['msg']
                errors.add(name, message)
            errors.raise_if_any('Malformed request', f"Invalid {cls.__name__} payload")

    def to_json(self):
        return self.model_dump(mode='json', by_alias=True)


class TaskDto(WireModel):
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    user_id: Optional[int] = Field(None, alias='userId')
    parent_id: Optional[int] = Field(None, alias='parentId')
    status: Optional[str] = None
    # stored in naive DateTime columns; an offset would be silently dropped
    creation_time: Optional[NaiveDatetime] = Field(None, alias='creationTime')
    modified_time: Optional[NaiveDatetime] = Field(None, alias='modifiedTime')


class AddTaskRequest(TaskDto):
    title: str
    user_id: int = Field(..., alias='userId')

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _not_blank(v).strip()


class UpdateTaskRequest(AddTaskRequest):
    id: int


class UserDto(WireModel):
    id: Optional[int] = None
    username: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None

    def to_json(self):
        return self.model_dump(mode='json', by_alias=True, exclude={'password'})


class RegisterRequest(UserDto):
    username: str
    password: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _not_blank(v).strip()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _not_blank(v)


class UpdateUserRequest(UserDto):
    id: int
    username: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _not_blank(v).strip()


class LoginDto(WireModel):
    username: str
    password: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _not_blank(v).strip()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _not_blank(v)


class NewPasswordDto(WireModel):
    user_id: int = Field(..., alias='userId')
    old_password: str = Field(..., alias='oldPassword')
    new_password: str = Field(..., alias='newPassword')
    repeated_new_password: str = Field(..., alias='repeatedNewPassword')

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, v):
        return _not_blank(v)
