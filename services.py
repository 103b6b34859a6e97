"""Persistence services over the Flask-SQLAlchemy session, plus password hashing."""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from models import Task, User, db

logger = logging.getLogger(__name__)

# ids are stored as SQLite INTEGER, a signed 64-bit value
MIN_ID, MAX_ID = -2**63, 2**63 - 1


def storable_id(value):
    return value is not None and MIN_ID <= value <= MAX_ID


class PasswordEncoder:
    def __init__(self, method='scrypt'):
        self.method = method

    def encode(self, raw_password):
        return generate_password_hash(raw_password, method=self.method)

    def matches(self, raw_password, hashed):
        if raw_password is None or not hashed:
            return False
        return check_password_hash(hashed, raw_password)


class TaskService:
    def get_task_by_id(self, task_id):
        if not storable_id(task_id):
            return None
        return db.session.get(Task, task_id)

    def get_tasks_by_parent_id(self, parent_id):
        if not storable_id(parent_id):
            return []
        return Task.query.filter_by(parent_id=parent_id).all()

    def get_tasks_by_user_id(self, user_id, status=None):
        if not storable_id(user_id):
            return []
        query = Task.query.filter_by(user_id=user_id)
        if status is not None:
            query = query.filter_by(status=status)
        return query.all()

    def create_task(self, task):
        db.session.add(task)
        db.session.commit()
        logger.debug("Inserted task id=%s user_id=%s", task.id, task.user_id)
        return task

    def update_task(self, task):
        merged = db.session.merge(task)
        db.session.commit()
        logger.debug("Updated task id=%s", merged.id)
        return merged


class UserService:
    def __init__(self, encoder):
        self.encoder = encoder

    def get_user_by_id(self, user_id):
        if not storable_id(user_id):
            return None
        return db.session.get(User, user_id)

    def get_all_users(self):
        return User.query.all()

    def get_user_by_username(self, username):
        if username is None:
            return None
        return User.query.filter_by(username=username).first()

    def username_exists(self, username):
        return self.get_user_by_username(username) is not None

    def create_user(self, user):
        db.session.add(user)
        db.session.commit()
        logger.debug("Inserted user id=%s", user.id)
        return user

    def update_user(self, user):
        merged = db.session.merge(user)
        db.session.commit()
        return merged

    def authenticate(self, login_dto):
        user = self.get_user_by_username(login_dto.username)
        if user and self.encoder.matches(login_dto.password, user.password):
            return user
        return None

    def check_if_valid_old_password(self, user, old_password):
        return self.encoder.matches(old_password, user.password)

    def change_password(self, user, new_password):
        user.password = self.encoder.encode(new_password)
        db.session.commit()
        return True
