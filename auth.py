import logging
from functools import wraps

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required
from pydantic import ValidationError as PydanticValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from errors import ConflictError, InvalidCredentials, UnauthenticatedError, UnauthorizedError
from extensions import get_authenticator, get_storage, login_manager
from schemas import LoginIn, RegisterIn

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


# =====================
# SESSION AUTHENTICATOR
# =====================
class Authenticator:
    """Checks credentials against the store and binds principals to sessions."""

    def __init__(self, storage, sessions, signer):
        self.storage = storage
        self.sessions = sessions
        self.signer = signer

    def authenticate(self, username, password):
        account = self.storage.get_account_by_username(username)
        if account is None:
            logger.info("Login failed: unknown username %r", username)
            raise InvalidCredentials()
        if not check_password_hash(account.password, password):
            logger.info("Login failed: bad password for %r", username)
            raise InvalidCredentials()
        return account

    def establish_session(self, account):
        record = self.sessions.create({"user_id": account.id})
        return record.sid

    def current_principal(self, sid):
        if not sid:
            return None
        record = self.sessions.get(sid)
        if record is None:
            return None
        user_id = record.data.get("user_id")
        if user_id is None:
            return None
        return self.storage.get_account(user_id)

    def destroy_session(self, sid):
        if sid:
            self.sessions.destroy(sid)

    # Cookie plumbing

    def session_id_from(self, req):
        raw = req.cookies.get(current_app.config["AUTH_COOKIE_NAME"])
        return self.signer.unsign(raw)

    def set_cookie(self, response, sid):
        config = current_app.config
        response.set_cookie(
            config["AUTH_COOKIE_NAME"],
            self.signer.sign(sid),
            max_age=int(self.sessions.lifetime.total_seconds()),
            httponly=True,
            samesite="Lax",
            secure=config.get("AUTH_COOKIE_SECURE", False),
        )

    def clear_cookie(self, response):
        response.delete_cookie(
            current_app.config["AUTH_COOKIE_NAME"],
            httponly=True,
            samesite="Lax",
            secure=current_app.config.get("AUTH_COOKIE_SECURE", False),
        )


def hash_password(password):
    return generate_password_hash(password)


# =====================
# LOGIN MANAGER
# =====================
@login_manager.request_loader
def load_principal(req):
    authenticator = get_authenticator()
    return authenticator.current_principal(authenticator.session_id_from(req))


@login_manager.unauthorized_handler
def unauthorized():
    raise UnauthenticatedError()


def admin_required(view):
    """Only admins pass; anonymous callers get the same 403 as non-admins."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated or not getattr(current_user, "is_admin", False):
            raise UnauthorizedError()
        return view(*args, **kwargs)

    return wrapper


def _login_response(account, status):
    authenticator = get_authenticator()
    old_sid = authenticator.session_id_from(request)
    authenticator.destroy_session(old_sid)

    sid = authenticator.establish_session(account)
    response = jsonify(account.to_public())
    response.status_code = status
    authenticator.set_cookie(response, sid)
    return response


# =====================
# AUTH ROUTES
# =====================
@auth_bp.post("/register")
def register():
    body = RegisterIn.model_validate(request.get_json(silent=True) or {})
    storage = get_storage()

    if storage.get_account_by_username(body.username):
        raise ConflictError("Username already exists")
    if storage.get_account_by_email(body.email):
        raise ConflictError("Email already exists")

    account = storage.create_account({
        "username": body.username,
        "password": hash_password(body.password),
        "name": body.name,
        "email": str(body.email),
        "is_admin": body.is_admin,
    })
    logger.info("Registered account %d (%s)", account.id, account.username)
    return _login_response(account, 201)


@auth_bp.post("/login")
def login():
    try:
        body = LoginIn.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError:
        raise InvalidCredentials()
    account = get_authenticator().authenticate(body.username, body.password)
    logger.info("Login successful for %s", account.username)
    return _login_response(account, 200)


@auth_bp.post("/logout")
def logout():
    authenticator = get_authenticator()
    authenticator.destroy_session(authenticator.session_id_from(request))
    response = jsonify({"message": "Logged out successfully"})
    authenticator.clear_cookie(response)
    return response


@auth_bp.get("/user")
@login_required
def user():
    return jsonify(current_user.to_public())
