import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('TODOLIST_DATABASE_URI', 'sqlite:///todolist.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv('TODOLIST_LOG_LEVEL', 'INFO')
    PASSWORD_HASH_METHOD = os.getenv('TODOLIST_PASSWORD_HASH_METHOD', 'scrypt')
    CORS_ORIGINS = os.getenv('TODOLIST_CORS_ORIGINS', '*')
