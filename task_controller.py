import logging
from datetime import datetime
from http import HTTPStatus

from dtos import TaskDto
from errors import ErrorCollector, ErrorModel, FieldError, ValidationFailure
from models import Status, Task

logger = logging.getLogger(__name__)


def task_to_dto(task):
    return TaskDto(
        id=task.id,
        title=task.title,
        description=task.description,
        user_id=task.user_id,
        parent_id=task.parent_id,
        status=task.status.name if task.status is not None else None,
        creation_time=task.creation_time,
        modified_time=task.modified_time,
    )


def dto_to_task(dto):
    """Build a detached Task from the DTO. The status must already be validated."""
    return Task(
        id=dto.id,
        title=dto.title,
        description=dto.description,
        user_id=dto.user_id,
        parent_id=dto.parent_id,
        status=Status.from_name(dto.status) if dto.status is not None else Status.OPEN,
        creation_time=dto.creation_time,
        modified_time=dto.modified_time,
    )


class TaskController:
    def __init__(self, task_service, user_service, clock=datetime.now):
        self.task_service = task_service
        self.user_service = user_service
        self.clock = clock

    def add(self, task_dto):
        # the store assigns ids on insert
        task_dto.id = None
        self.validate_task(task_dto, is_update=False)

        task = self.convert_to_entity(task_dto, is_update=False)
        task = self.task_service.create_task(task)
        logger.info("Task created id=%s user_id=%s", task.id, task.user_id)
        return task_to_dto(task)

    def update(self, task_dto):
        self.validate_task(task_dto, is_update=True)

        task = self.convert_to_entity(task_dto, is_update=True)
        task = self.task_service.update_task(task)
        logger.info("Task updated id=%s", task.id)
        return task_to_dto(task)

    def get(self, task_id):
        task = self.task_service.get_task_by_id(task_id)
        if task is not None:
            return task_to_dto(task)
        # unknown ids yield an empty task, not a 404
        return TaskDto()

    def list_by_parent(self, parent_id):
        return [task_to_dto(t) for t in self.task_service.get_tasks_by_parent_id(parent_id)]

    def list_by_user(self, user_id, status=None):
        if status is None:
            tasks = self.task_service.get_tasks_by_user_id(user_id)
        else:
            try:
                wanted = Status.from_name(status)
            except ValueError as e:
                model = ErrorModel(
                    HTTPStatus.BAD_REQUEST, "Status is wrong!",
                    debug_message=str(e),
                    sub_errors=[FieldError('status', f"'{status}' is not a valid status")],
                )
                logger.info("Rejected task listing for user_id=%s: %s", user_id, e)
                raise ValidationFailure(model, str(e)) from e
            tasks = self.task_service.get_tasks_by_user_id(user_id, wanted)
        return [task_to_dto(t) for t in tasks]

    def convert_to_entity(self, task_dto, is_update):
        task = dto_to_task(task_dto)
        if is_update:
            old_task = self.task_service.get_task_by_id(task_dto.id)
            if old_task is not None:
                task.creation_time = old_task.creation_time

        now = self.clock()
        if task.creation_time is None:
            task.creation_time = now
        task.modified_time = now
        return task

    def validate_task(self, task_dto, is_update):
        errors = ErrorCollector()
        if is_update and self.task_service.get_task_by_id(task_dto.id) is None:
            errors.add('Id', "This task does not exist!")
        if task_dto.user_id is not None and self.user_service.get_user_by_id(task_dto.user_id) is None:
            errors.add('UserId', "User does not exist!")
        if task_dto.parent_id is not None and self.task_service.get_task_by_id(task_dto.parent_id) is None:
            errors.add('ParentId', "Parent does not exist!")
        if task_dto.status is not None:
            try:
                Status.from_name(task_dto.status)
            except ValueError:
                errors.add('status', f"'{task_dto.status}' is not a valid status")

        errors.raise_if_any("Validation errors", "Validation error in TaskController.validate_task()")
