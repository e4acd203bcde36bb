# medtrack/__init__.py
import os
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from .errors import MedTrackError
from .extensions import db, jwt, migrate
from .helpers import api_response
from .utils.timeutils import server_tz

load_dotenv()


def _env_flag(name, default):
    return os.getenv(name, default).lower() == "true"


def _load_config(app):
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///medtrack.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'change-me-in-production')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=int(os.getenv('JWT_ACCESS_TOKEN_HOURS', '24')))

    app.config['APP_TIMEZONE'] = os.getenv('APP_TIMEZONE', 'UTC')
    app.config['ADHERENCE_WINDOW_DAYS'] = int(os.getenv('ADHERENCE_WINDOW_DAYS', '30'))
    app.config['NOTIFICATIONS_ENABLED'] = _env_flag('NOTIFICATIONS_ENABLED', 'true')
    app.config['CORS_ORIGINS'] = [
        o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173').split(',')
        if o.strip()
    ]
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()


def create_app(test_config=None):
    app = Flask(__name__)
    _load_config(app)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config['LOG_LEVEL'])
    try:
        server_tz(app.config['APP_TIMEZONE'])
    except (KeyError, ValueError) as e:
        raise RuntimeError(f"Unknown APP_TIMEZONE: {app.config['APP_TIMEZONE']!r}") from e

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    CORS(app,
         origins=app.config['CORS_ORIGINS'],
         supports_credentials=True,
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"])

    from .services.notifications import LogNotifier
    app.extensions['medtrack.notifier'] = app.config.get('NOTIFIER') or LogNotifier()

    @app.errorhandler(MedTrackError)
    def handle_medtrack_error(e):
        return api_response(False, e.message, status_code=e.status_code)

    @app.errorhandler(Exception)
    def handle_error(e):
        from werkzeug.exceptions import HTTPException
        if isinstance(e, HTTPException):
            return api_response(False, e.description, status_code=e.code)
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return api_response(False, "Internal server error", status_code=500)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return api_response(False, "Token expired", status_code=401)

    @jwt.invalid_token_loader
    def invalid_token_callback(err_msg):
        return api_response(False, "Invalid token", status_code=401)

    @jwt.unauthorized_loader
    def missing_token_callback(err_msg):
        return api_response(False, "Authentication required", status_code=401)

    from .routes.auth_routes import auth_bp
    from .routes.medication_routes import medications_bp
    from .routes.caretaker_routes import caretaker_bp
    from .routes.health_routes import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(medications_bp)
    app.register_blueprint(caretaker_bp)
    app.register_blueprint(health_bp)

    return app
