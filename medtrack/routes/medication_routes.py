# medtrack/routes/medication_routes.py
from flask import Blueprint
from medtrack.controllers import medication_controller

medications_bp = Blueprint("medications", __name__, url_prefix="/api/v1")

medications_bp.route("/medications", methods=["GET"])(medication_controller.list_medications)
medications_bp.route("/medications", methods=["POST"])(medication_controller.create_medication)
medications_bp.route("/medications/<int:medication_id>", methods=["PUT"])(medication_controller.update_medication)
medications_bp.route("/medications/<int:medication_id>", methods=["DELETE"])(medication_controller.delete_medication)
medications_bp.route("/medications/<int:medication_id>/log", methods=["POST"])(medication_controller.log_medication)
medications_bp.route("/medications/adherence", methods=["GET"])(medication_controller.get_adherence)
medications_bp.route("/medication-logs", methods=["GET"])(medication_controller.list_logs)
