import enum
from medtrack.extensions import db
from medtrack.utils.timeutils import naive_utc


class Frequency(str, enum.Enum):
    DAILY = "daily"
    TWICE_DAILY = "twice_daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    AS_NEEDED = "as_needed"


class Medication(db.Model):
    __tablename__ = "medications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    dosage = db.Column(db.String(60), nullable=False)     # e.g., "10 mg"
    frequency = db.Column(
        db.Enum(Frequency, name="medication_frequency", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    time_of_day = db.Column(db.Time(timezone=False), nullable=False)

    created_at = db.Column(db.DateTime, default=naive_utc, index=True)
    updated_at = db.Column(db.DateTime, default=naive_utc, onupdate=naive_utc)

    user = db.relationship("User", back_populates="medications")
    logs = db.relationship("MedicationLog", back_populates="medication", cascade="all,delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency.value,
            "time": self.time_of_day.strftime("%H:%M"),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
