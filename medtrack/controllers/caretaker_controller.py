# medtrack/controllers/caretaker_controller.py
from flask import jsonify, request
from flask_jwt_extended import jwt_required

from medtrack.helpers import api_response, json_body
from medtrack.controllers.medication_controller import adherence_summary_for
from medtrack.services import care, intake, medications
from medtrack.services.identity import current_credential


@jwt_required(optional=True)
def add_patient():
    data = json_body()
    care.link_patient(current_credential(), data.get("patientId"))
    return api_response(True, "Patient added successfully", status_code=201)


@jwt_required(optional=True)
def list_patients():
    return jsonify(care.list_patients(current_credential())), 200


@jwt_required(optional=True)
def patient_medications(patient_id):
    care.require_patient_access(current_credential(), patient_id)
    return jsonify([m.to_dict() for m in medications.list_for_owner(patient_id)]), 200


@jwt_required(optional=True)
def patient_logs(patient_id):
    care.require_patient_access(current_credential(), patient_id)
    start = intake.parse_day(request.args.get("startDate"), "startDate")
    end = intake.parse_day(request.args.get("endDate"), "endDate")
    return jsonify(intake.query_logs(patient_id, start, end)), 200


@jwt_required(optional=True)
def patient_adherence(patient_id):
    care.require_patient_access(current_credential(), patient_id)
    return jsonify(adherence_summary_for(patient_id)), 200
