from medtrack.extensions import db
from medtrack.utils.timeutils import as_utc


class MedicationLog(db.Model):
    """One intake of one medication; at most one per medication per server-local day."""
    __tablename__ = "medication_logs"

    id = db.Column(db.Integer, primary_key=True)
    medication_id = db.Column(db.Integer, db.ForeignKey("medications.id", ondelete="CASCADE"),
                              nullable=False, index=True)
    # owner copied from the medication so access checks skip the join
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    taken_at = db.Column(db.DateTime, nullable=False)
    taken_on = db.Column(db.Date, nullable=False)
    proof_image = db.Column(db.String(512), nullable=True)  # reference only, never the blob

    medication = db.relationship("Medication", back_populates="logs")

    __table_args__ = (
        db.UniqueConstraint("medication_id", "taken_on", name="uq_medication_logs_medication_day"),
        db.Index("ix_medication_logs_user_day", "user_id", "taken_on"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "medication_id": self.medication_id,
            "user_id": self.user_id,
            "taken_at": as_utc(self.taken_at).isoformat(),
            "taken_on": self.taken_on.isoformat(),
            "proof_image": self.proof_image,
        }
