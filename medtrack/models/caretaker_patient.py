from medtrack.extensions import db
from medtrack.utils.timeutils import naive_utc


class CaretakerPatient(db.Model):
    __tablename__ = "caretaker_patient"

    id = db.Column(db.Integer, primary_key=True)
    caretaker_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=naive_utc)

    caretaker = db.relationship("User", foreign_keys=[caretaker_id])
    patient = db.relationship("User", foreign_keys=[patient_id])

    __table_args__ = (
        db.UniqueConstraint("caretaker_id", "patient_id", name="uq_caretaker_patient_pair"),
    )
