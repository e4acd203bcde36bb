import enum
from werkzeug.security import generate_password_hash, check_password_hash
from medtrack.extensions import db
from medtrack.utils.timeutils import naive_utc


class Role(str, enum.Enum):
    PATIENT = "patient"
    CARETAKER = "caretaker"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(80), unique=True, index=True, nullable=False)
    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    # fixed at registration
    role = db.Column(db.Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]), nullable=False)

    created_at = db.Column(db.DateTime, default=naive_utc)

    medications = db.relationship("Medication", back_populates="user", cascade="all,delete-orphan")

    def set_password(self, raw: str):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        return check_password_hash(self.password_hash, raw)

    def to_summary(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
        }
