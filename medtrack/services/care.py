# medtrack/services/care.py
from flask import current_app
from sqlalchemy.exc import IntegrityError

from medtrack.errors import Conflict, NotFound, ValidationError
from medtrack.extensions import db
from medtrack.models import CaretakerPatient, Role, User
from medtrack.services import notifications
from medtrack.services.authorization import Action, Target, require


def is_linked(caretaker_id, patient_id) -> bool:
    return (
        db.session.query(CaretakerPatient.id)
        .filter_by(caretaker_id=caretaker_id, patient_id=patient_id)
        .first()
        is not None
    )


def _coerce_patient_id(raw):
    if raw in (None, ""):
        raise ValidationError("Patient ID is required")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Patient ID must be an integer")


def link_patient(credential, patient_id) -> CaretakerPatient:
    require(credential, Action.MANAGE_CARE)
    patient_id = _coerce_patient_id(patient_id)

    patient = User.query.filter_by(id=patient_id, role=Role.PATIENT).first()
    if not patient:
        raise NotFound("Patient not found")

    if is_linked(credential.account_id, patient.id):
        raise Conflict("Patient already added")

    link = CaretakerPatient(caretaker_id=credential.account_id, patient_id=patient.id)
    try:
        db.session.add(link)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Patient already added")

    current_app.logger.info(f"Caretaker {credential.account_id} linked to patient {patient.id}")
    notifications.dispatch("patient_linked", patient=patient, caretaker=db.session.get(User, credential.account_id))
    return link


def list_patients(credential):
    require(credential, Action.MANAGE_CARE)
    rows = (
        db.session.query(User, CaretakerPatient.created_at)
        .join(CaretakerPatient, CaretakerPatient.patient_id == User.id)
        .filter(CaretakerPatient.caretaker_id == credential.account_id)
        .order_by(CaretakerPatient.created_at.asc(), CaretakerPatient.id.asc())
        .all()
    )
    return [
        {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "added_at": added_at.isoformat() if added_at else None,
        }
        for user, added_at in rows
    ]


def require_patient_access(credential, patient_id):
    """Guard for caretaker reads of one patient's medications and logs."""
    linked = bool(credential) and credential.is_caretaker and is_linked(credential.account_id, patient_id)
    require(credential, Action.READ_PATIENT, Target(owner_id=patient_id, linked=linked))
    return patient_id
