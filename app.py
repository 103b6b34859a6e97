from http import HTTPStatus

from flask import Flask, json, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Config
from dtos import (
    AddTaskRequest,
    LoginDto,
    NewPasswordDto,
    RegisterRequest,
    UpdateTaskRequest,
    UpdateUserRequest,
)
from errors import ErrorModel, TodoListError
from logging_setup import setup_logging
from models import db
from services import PasswordEncoder, TaskService, UserService
from task_controller import TaskController
from user_controller import UserController


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    CORS(app, origins=app.config['CORS_ORIGINS'])
    db.init_app(app)

    with app.app_context():
        db.create_all()

    encoder = PasswordEncoder(app.config['PASSWORD_HASH_METHOD'])
    user_service = UserService(encoder)
    task_service = TaskService()
    tasks = TaskController(task_service, user_service)
    users = UserController(user_service, encoder)

    @app.errorhandler(TodoListError)
    def handle_todolist_error(e):
        return jsonify(e.error_model.to_json()), int(e.status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # keep werkzeug's headers, e.g. Allow on a 405
        response = e.get_response()
        response.data = json.dumps(ErrorModel(HTTPStatus(e.code), e.description).to_json())
        response.content_type = 'application/json'
        return response

    # Tasks

    @app.route('/task/add', methods=['POST'])
    def add_task():
        dto = AddTaskRequest.from_json(request.get_data())
        return jsonify(tasks.add(dto).to_json())

    @app.route('/task/update', methods=['PUT'])
    def update_task():
        dto = UpdateTaskRequest.from_json(request.get_data())
        return jsonify(tasks.update(dto).to_json())

    @app.route('/task/<int:task_id>')
    def get_task(task_id):
        return jsonify(tasks.get(task_id).to_json())

    @app.route('/task/parent/<int:parent_id>')
    def get_tasks_of_parent(parent_id):
        return jsonify([t.to_json() for t in tasks.list_by_parent(parent_id)])

    @app.route('/task/user/<int:user_id>')
    @app.route('/task/user/<int:user_id>/<status>')
    def get_tasks_of_user(user_id, status=None):
        return jsonify([t.to_json() for t in tasks.list_by_user(user_id, status)])

    # Users

    @app.route('/users', methods=['POST'])
    def register():
        dto = RegisterRequest.from_json(request.get_data())
        return jsonify(users.register(dto).to_json())

    @app.route('/users', methods=['PUT'])
    def update_user():
        dto = UpdateUserRequest.from_json(request.get_data())
        return jsonify(users.update(dto).to_json())

    @app.route('/login', methods=['POST'])
    def login():
        dto = LoginDto.from_json(request.get_data())
        return jsonify(users.login(dto).to_json())

    @app.route('/users', methods=['GET'])
    def get_all_users():
        return jsonify([u.to_json() for u in users.get_all()])

    @app.route('/users/<int:user_id>')
    def get_user(user_id):
        return jsonify(users.get_by_id(user_id).to_json())

    @app.route('/users/changePassword', methods=['PUT'])
    def change_password():
        dto = NewPasswordDto.from_json(request.get_data())
        return jsonify(users.change_password(dto))

    return app


if __name__ == '__main__':
    setup_logging(Config.LOG_LEVEL)
    create_app().run(debug=True)
