# medtrack/routes/caretaker_routes.py
from flask import Blueprint
from medtrack.controllers import caretaker_controller

caretaker_bp = Blueprint("caretaker", __name__, url_prefix="/api/v1/caretaker")

caretaker_bp.route("/patients", methods=["POST"])(caretaker_controller.add_patient)
caretaker_bp.route("/patients", methods=["GET"])(caretaker_controller.list_patients)
caretaker_bp.route("/patients/<int:patient_id>/medications", methods=["GET"])(caretaker_controller.patient_medications)
caretaker_bp.route("/patients/<int:patient_id>/logs", methods=["GET"])(caretaker_controller.patient_logs)
caretaker_bp.route("/patients/<int:patient_id>/adherence", methods=["GET"])(caretaker_controller.patient_adherence)
