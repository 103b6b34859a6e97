import enum

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


class Status(enum.Enum):
    OPEN = 'OPEN'
    IN_PROGRESS = 'IN_PROGRESS'
    DONE = 'DONE'

    @classmethod
    def from_name(cls, name):
        """Look up a member by exact name; raises ValueError for anything else."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"No status named '{name}'") from None


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=True)
    # salted hash, never the plaintext
    password = db.Column(db.String(255), nullable=False)
    tasks = db.relationship('Task', backref='user', lazy=True)

    def __repr__(self):
        return f"<User {self.username}>"


class Task(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    parent_id = db.Column(db.Integer, db.ForeignKey('task.id'), nullable=True)
    status = db.Column(db.Enum(Status), nullable=False, default=Status.OPEN)

    creation_time = db.Column(db.DateTime, nullable=False)
    modified_time = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f"<Task {self.id} {self.title}>"
