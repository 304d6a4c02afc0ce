from flask import current_app
from flask_login import LoginManager

login_manager = LoginManager()


def get_storage():
    return current_app.extensions["storage"]


def get_authenticator():
    return current_app.extensions["authenticator"]
