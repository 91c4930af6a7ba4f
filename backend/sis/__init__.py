from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from .config import Config
from sis.routes import register_routes
from sis.models import TokenBlocklist
from sis.errors import SISError
from sis.extensions import db, jwt, limiter, mail, migrate


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    jwt.init_app(app)
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    limiter.init_app(app)
    mail.init_app(app)
    register_routes(app)
    migrate.init_app(app, db)
    register_error_handlers(app)

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        token = db.session.query(TokenBlocklist).filter_by(jti=jti).first()
        return token is not None

    with app.app_context():
        db.create_all()

    return app


def _envelope(message, status_code):
    return jsonify({"success": False, "message": message}), status_code


def register_error_handlers(app):
    """Every failure leaves the API as ``{"success": false, "message": ...}``."""

    @app.errorhandler(SISError)
    def handle_sis_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 429:
            return _envelope("Rate limit exceeded. Please slow down.", 429)
        return _envelope(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", error)
        return _envelope("Server error", 500)

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _envelope("No token provided", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _envelope("Invalid token", 403)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _envelope("Session expired. Please login again.", 401)

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return _envelope("Token has been revoked", 401)
