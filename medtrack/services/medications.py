# medtrack/services/medications.py
from datetime import datetime

from flask import current_app

from medtrack.errors import ValidationError
from medtrack.extensions import db
from medtrack.models import Frequency, Medication, MedicationLog
from medtrack.services.authorization import Action, Target, require

REQUIRED_FIELDS = ("name", "dosage", "frequency", "time")


def parse_time_of_day(raw):
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except (TypeError, ValueError):
        raise ValidationError("Time must be in HH:MM format")


def validate_payload(data):
    """Normalise a medication body; every field is required on create and update."""
    data = data or {}
    values = {f: (str(data.get(f) or "")).strip() for f in REQUIRED_FIELDS}
    missing = [f for f in REQUIRED_FIELDS if not values[f]]
    if missing:
        raise ValidationError(f"All fields are required (missing: {', '.join(missing)})")
    for field, column in (("name", Medication.__table__.c.name), ("dosage", Medication.__table__.c.dosage)):
        if len(values[field]) > column.type.length:
            raise ValidationError(f"{field} must be at most {column.type.length} characters")

    try:
        frequency = Frequency(values["frequency"].lower())
    except ValueError:
        allowed = ", ".join(f.value for f in Frequency)
        raise ValidationError(f"Frequency must be one of: {allowed}")

    return {
        "name": values["name"],
        "dosage": values["dosage"],
        "frequency": frequency,
        "time_of_day": parse_time_of_day(values["time"]),
    }


def _target_for(medication_id):
    medication = db.session.get(Medication, medication_id)
    if medication is None:
        return None, Target(exists=False)
    return medication, Target(owner_id=medication.user_id)


def list_for_owner(owner_id):
    return (
        Medication.query.filter_by(user_id=owner_id)
        .order_by(Medication.created_at.desc(), Medication.id.desc())
        .all()
    )


def count_for_owner(owner_id) -> int:
    return Medication.query.filter_by(user_id=owner_id).count()


def create_medication(credential, data) -> Medication:
    require(credential, Action.MANAGE_MEDICATION, Target(owner_id=credential.account_id if credential else None))
    fields = validate_payload(data)

    medication = Medication(user_id=credential.account_id, **fields)
    db.session.add(medication)
    db.session.commit()
    current_app.logger.info(f"Medication {medication.id} added for account id={credential.account_id}")
    return medication


def update_medication(credential, medication_id, data) -> Medication:
    medication, target = _target_for(medication_id)
    require(credential, Action.MANAGE_MEDICATION, target)
    fields = validate_payload(data)

    for key, value in fields.items():
        setattr(medication, key, value)
    db.session.commit()
    return medication


def delete_medication(credential, medication_id):
    medication, target = _target_for(medication_id)
    require(credential, Action.MANAGE_MEDICATION, target)

    # logs first, then the medication, committed together
    try:
        removed = (
            MedicationLog.query.filter_by(medication_id=medication_id)
            .delete(synchronize_session="fetch")
        )
        db.session.delete(medication)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"Medication {medication_id} deleted with {removed} log(s)")
    return removed
