# medtrack/routes/health_routes.py
from flask import Blueprint, current_app
from sqlalchemy import text
from medtrack.extensions import db
from medtrack.helpers import api_response

health_bp = Blueprint('health', __name__, url_prefix="/api/v1/health")


@health_bp.route('', methods=["GET"])
def health():
    return api_response(True, "OK", {"version": "1.0.0"})


@health_bp.route('/db', methods=["GET"])
def db_health():
    try:
        db.session.execute(text('SELECT 1'))
        return api_response(True, "Database connection successful", {"status": "connected"})
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Database health check failed")
        return api_response(False, "Database connection failed", {"status": "unavailable"}, status_code=503)
