# medtrack/controllers/medication_controller.py
from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required

from medtrack.helpers import api_response, json_body
from medtrack.services import adherence, intake, medications
from medtrack.services.authorization import Action, Target, require
from medtrack.services.identity import current_credential


def _own_reader():
    credential = current_credential()
    require(credential, Action.READ_OWN, Target(owner_id=credential.account_id if credential else None))
    return credential


@jwt_required(optional=True)
def list_medications():
    credential = _own_reader()
    meds = medications.list_for_owner(credential.account_id)
    return jsonify([m.to_dict() for m in meds]), 200


@jwt_required(optional=True)
def create_medication():
    medication = medications.create_medication(current_credential(), json_body())
    return api_response(True, "Medication added successfully", status_code=201, medication=medication.to_dict())


@jwt_required(optional=True)
def update_medication(medication_id):
    medication = medications.update_medication(current_credential(), medication_id, json_body())
    return api_response(True, "Medication updated successfully", medication=medication.to_dict())


@jwt_required(optional=True)
def delete_medication(medication_id):
    medications.delete_medication(current_credential(), medication_id)
    return api_response(True, "Medication deleted successfully")


@jwt_required(optional=True)
def log_medication(medication_id):
    # proof_image is a reference to an already stored image; JSON or form body
    data = json_body() or request.form
    log = intake.log_intake(current_credential(), medication_id, proof_image=data.get("proof_image"))
    return api_response(True, "Medication logged successfully", status_code=201, log=log.to_dict())


@jwt_required(optional=True)
def list_logs():
    credential = _own_reader()
    start = intake.parse_day(request.args.get("startDate"), "startDate")
    end = intake.parse_day(request.args.get("endDate"), "endDate")
    return jsonify(intake.query_logs(credential.account_id, start, end)), 200


def adherence_summary_for(owner_id):
    window = current_app.config["ADHERENCE_WINDOW_DAYS"]
    events = intake.events_for_owner(owner_id)
    return adherence.summarize(events, medications.count_for_owner(owner_id), window_days=window)


@jwt_required(optional=True)
def get_adherence():
    credential = _own_reader()
    return jsonify(adherence_summary_for(credential.account_id)), 200
