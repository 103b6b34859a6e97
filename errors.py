"""
Error taxonomy and the JSON error payload.

Every failure raised by the controllers carries an ErrorModel; the handlers
registered in app.create_app() turn it into a response with the matching
status code.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus

logger = logging.getLogger(__name__)


@dataclass
class FieldError:
    field: str
    message: str

    def to_json(self):
        return {'field': self.field, 'message': self.message}


@dataclass
class ErrorModel:
    status: HTTPStatus
    message: str
    debug_message: str = None
    sub_errors: list = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_json(self):
        return {
            'status': int(self.status),
            'error': self.status.phrase,
            'timestamp': self.timestamp.isoformat(),
            'message': self.message,
            'debugMessage': self.debug_message,
            'subErrors': [e.to_json() for e in self.sub_errors],
        }


class TodoListError(Exception):
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, error_model, log_message=None):
        super().__init__(log_message or error_model.message)
        self.error_model = error_model

    @property
    def fields(self):
        return [e.field for e in self.error_model.sub_errors]


class ValidationFailure(TodoListError):
    status = HTTPStatus.BAD_REQUEST


class NotFoundFailure(TodoListError):
    status = HTTPStatus.NOT_FOUND


class AuthenticationFailure(TodoListError):
    """Bad credentials. Never carries field-level detail."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, message):
        super().__init__(ErrorModel(HTTPStatus.UNAUTHORIZED, message))


class ErrorCollector:
    """
    Accumulates (field, message) pairs and raises them as one ValidationFailure.

    Checks never stop at the first problem; callers add everything they find
    and call raise_if_any() once at the end.
    """

    def __init__(self):
        self.errors = []

    def add(self, field_name, message):
        self.errors.append(FieldError(field_name, message))
        return self

    @property
    def has_errors(self):
        return bool(self.errors)

    def raise_if_any(self, message='Validation errors', log_message=None):
        if not self.errors:
            return
        model = ErrorModel(HTTPStatus.BAD_REQUEST, message, sub_errors=list(self.errors))
        logger.info("%s: %s", log_message or message,
                    ", ".join(f"{e.field}={e.message!r}" for e in self.errors))
        raise ValidationFailure(model, log_message)
