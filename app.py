import logging

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from auth import Authenticator, auth_bp
from config import Config
from errors import ApiError, InternalError
from extensions import login_manager
from routes import api_bp
from seed import seed_storage
from sessions import SessionCookieSigner, SessionStore
from storage import MemStorage

logger = logging.getLogger(__name__)


def configure_logging(level="INFO"):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root_logger.handlers = [handler]
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


# =====================
# APP FACTORY
# =====================
def create_app(config_object=None, storage=None):
    """Build the app around an explicitly supplied (or fresh) entity store."""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    if not app.config.get("TESTING"):
        configure_logging(app.config["LOG_LEVEL"])

    if storage is None:
        storage = MemStorage()
        if app.config["SEED_DEMO_DATA"]:
            seed_storage(storage)

    sessions = SessionStore(
        lifetime=app.config["SESSION_LIFETIME"],
        sweep_interval=app.config["SESSION_SWEEP_INTERVAL"],
    )
    app.extensions["storage"] = storage
    app.extensions["sessions"] = sessions
    app.extensions["authenticator"] = Authenticator(
        storage, sessions, SessionCookieSigner(app.config["SECRET_KEY"])
    )

    login_manager.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)

    @app.before_request
    def expire_sessions():
        sessions.tick()

    register_error_handlers(app)
    return app


# =====================
# ERROR HANDLERS
# =====================
def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(PydanticValidationError)
    def handle_validation_error(e):
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")
        return jsonify({"message": message, "errors": errors}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        error = InternalError()
        return jsonify(error.to_dict()), error.status_code


# =====================
# RUN
# =====================
if __name__ == "__main__":
    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=False)
