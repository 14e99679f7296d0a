import importlib
import traceback
from flask import Flask, request
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from .extensions import db, login_manager, rq
from .errors import ApiError

migrate = Migrate()

BLUEPRINTS = (
    ("auth", "/api/auth"),
    ("users", "/api/users"),
    ("applications", "/api/applications"),
    ("scoring", "/api/scoring"),
    ("reports", "/api/reports"),
    ("notifications", "/api/notifications"),
    ("pre_employment", "/api/pre-employment"),
)


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return err.to_dict(), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return {"success": False, "message": err.description}, err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        body = {"success": False, "message": "Internal server error"}
        if app.config.get("ENV") != "production":
            body["stack"] = traceback.format_exc()
        return body, 500


def create_app(overrides=None):
    """App factory. ``overrides`` is applied on top of ``config.Config``."""
    app = Flask(__name__)
    app.config.from_object('config.Config')
    if overrides:
        app.config.update(overrides)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    @login_manager.request_loader
    def load_user_from_request(req):
        header = req.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        from .services.users import load_user_from_token
        return load_user_from_token(header[len("Bearer "):].strip())

    # signal receivers for e-mail notifications
    from .services import notifications  # noqa: F401

    for name, prefix in BLUEPRINTS:
        module = importlib.import_module(f".blueprints.{name}", __name__)
        app.register_blueprint(module.bp, url_prefix=prefix)

    _register_error_handlers(app)

    @app.get('/api/health')
    def health():
        return {"status": "ok"}

    return app
