# medtrack/services/identity.py
"""
Identity store: account registration, credential checks and JWT issuance.

Credentials are Flask-JWT-Extended access tokens. The account id travels as
``sub`` and the role as a claim, so requests are authorised from the token
alone without a session table.
"""
from dataclasses import dataclass

from flask import current_app
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from medtrack.errors import Conflict, Unauthenticated, ValidationError
from medtrack.extensions import db
from medtrack.models import Role, User

MIN_PASSWORD_LENGTH = 6

_dummy_hash = None


@dataclass(frozen=True)
class Credential:
    account_id: int
    role: Role
    username: str = ""

    @property
    def is_patient(self) -> bool:
        return self.role == Role.PATIENT

    @property
    def is_caretaker(self) -> bool:
        return self.role == Role.CARETAKER


def _get_dummy_hash() -> str:
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = generate_password_hash("medtrack-timing-equaliser")
    return _dummy_hash


def parse_role(raw) -> Role:
    try:
        return Role(str(raw or "").strip().lower())
    except ValueError:
        raise ValidationError("Role must be 'patient' or 'caretaker'")


def register(username, password, email, role) -> User:
    username = str(username or "").strip()
    email = str(email or "").lower().strip()

    if not all([username, password, email, role]):
        raise ValidationError("All fields are required")
    if not isinstance(password, str):
        raise ValidationError("Password must be a string")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password too short")
    for field, value, column in (
        ("Username", username, User.__table__.c.username),
        ("Email", email, User.__table__.c.email),
    ):
        if len(value) > column.type.length:
            raise ValidationError(f"{field} must be at most {column.type.length} characters")
    role = parse_role(role)

    existing = User.query.filter((User.username == username) | (User.email == email)).first()
    if existing:
        raise Conflict("Username or email already exists")

    user = User(username=username, email=email, role=role)
    user.set_password(password)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.session.rollback()
        raise Conflict("Username or email already exists")

    current_app.logger.info(f"Registered {role.value} account id={user.id}")
    return user


def authenticate(username, password) -> User:
    username = str(username or "").strip()
    if not username or not password or not isinstance(password, str):
        raise ValidationError("Username and password are required")

    user = User.query.filter_by(username=username).first()
    if not user:
        # still pay for a hash check so unknown handles are not faster
        check_password_hash(_get_dummy_hash(), password)
        current_app.logger.info("Login failed: unknown username")
        raise Unauthenticated("Invalid credentials")

    if not user.check_password(password):
        current_app.logger.info(f"Login failed for account id={user.id}")
        raise Unauthenticated("Invalid credentials")

    return user


def issue_credential(user: User) -> str:
    return create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role.value, "username": user.username},
    )


def credential_from_claims(identity, claims) -> Credential:
    try:
        return Credential(
            account_id=int(identity),
            role=Role(claims.get("role")),
            username=claims.get("username", ""),
        )
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token")


def current_credential():
    """Credential of the current request, or None when no token was sent.

    Bad signatures and expired tokens are rejected by Flask-JWT-Extended
    before this returns.
    """
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is None:
        return None
    return credential_from_claims(identity, get_jwt())
