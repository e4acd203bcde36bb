# medtrack/services/intake.py
"""
Intake ledger.

A log row records that the owner took a medication. The calendar day is
computed once, in the configured server zone, and stored as ``taken_on`` so
the database unique constraint on (medication_id, taken_on) is what finally
decides whether a second "taken" for the same day gets in.
"""
from datetime import date

from flask import current_app
from sqlalchemy.exc import IntegrityError

from medtrack.errors import Conflict, NotFound, ValidationError
from medtrack.extensions import db
from medtrack.models import Medication, MedicationLog
from medtrack.services.authorization import Action, Target, require
from medtrack.utils import timeutils

MAX_PROOF_REF_LENGTH = 512


def _clean_proof_ref(proof_image):
    if proof_image is None:
        return None
    if not isinstance(proof_image, str):
        raise ValidationError("proof_image must be a reference string")
    proof_image = proof_image.strip()
    if len(proof_image) > MAX_PROOF_REF_LENGTH:
        raise ValidationError("proof_image reference is too long")
    return proof_image or None


def parse_day(raw, field):
    if raw in (None, ""):
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")


def logged_on(medication_id, day) -> bool:
    return MedicationLog.query.filter_by(medication_id=medication_id, taken_on=day).first() is not None


def log_intake(credential, medication_id, proof_image=None, now=None) -> MedicationLog:
    medication = db.session.get(Medication, medication_id)
    target = Target(exists=False) if medication is None else Target(owner_id=medication.user_id)
    require(credential, Action.LOG_INTAKE, target)
    proof_image = _clean_proof_ref(proof_image)

    now = now or timeutils.utcnow()
    today = timeutils.local_today(now)

    if logged_on(medication.id, today):
        raise Conflict("Medication already logged for today")

    log = MedicationLog(
        medication_id=medication.id,
        user_id=credential.account_id,
        taken_at=timeutils.naive_utc(now),
        taken_on=today,
        proof_image=proof_image,
    )
    try:
        db.session.add(log)
        db.session.commit()
    except IntegrityError:
        # a concurrent request logged the same day first, or the medication was deleted under us
        db.session.rollback()
        if db.session.get(Medication, medication_id) is None:
            raise NotFound("Medication not found")
        raise Conflict("Medication already logged for today")

    current_app.logger.info(f"Medication {medication.id} logged for {today.isoformat()}")
    return log


def query_logs(owner_id, start_date=None, end_date=None):
    """Logs of one account joined with their medication, newest first.

    ``start_date``/``end_date`` are inclusive and compare against the
    server-local calendar day of the intake.
    """
    query = (
        db.session.query(MedicationLog, Medication)
        .join(Medication, MedicationLog.medication_id == Medication.id)
        .filter(MedicationLog.user_id == owner_id)
    )
    if start_date:
        query = query.filter(MedicationLog.taken_on >= start_date)
    if end_date:
        query = query.filter(MedicationLog.taken_on <= end_date)

    rows = query.order_by(MedicationLog.taken_at.desc(), MedicationLog.id.desc()).all()
    return [_enriched(log, medication) for log, medication in rows]


def _enriched(log, medication):
    item = log.to_dict()
    item.update({
        "name": medication.name,
        "dosage": medication.dosage,
        "time": medication.time_of_day.strftime("%H:%M"),
    })
    return item


def events_for_owner(owner_id):
    """Raw log rows for the adherence engine."""
    return MedicationLog.query.filter_by(user_id=owner_id).all()
