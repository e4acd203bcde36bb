# medtrack/services/authorization.py
"""
Authorization guard.

``authorize`` is a pure function of the caller's credential, the action and a
description of the target; it never touches the database. Callers look up
whatever the target needs (owner id, care link) beforehand.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from medtrack.errors import ERRORS_BY_REASON

UNAUTHENTICATED = "unauthenticated"
FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"


class Action(enum.Enum):
    MANAGE_MEDICATION = "manage_medication"   # create / update / delete
    LOG_INTAKE = "log_intake"
    READ_OWN = "read_own"
    MANAGE_CARE = "manage_care"               # link / list patients
    READ_PATIENT = "read_patient"


@dataclass(frozen=True)
class Target:
    owner_id: Optional[int] = None
    exists: bool = True
    linked: bool = False


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None
    message: Optional[str] = None

    def __bool__(self):
        return self.allowed


ALLOW = Decision(True)


def _deny(reason, message):
    return Decision(False, reason, message)


def authorize(credential, action: Action, target: Target = None) -> Decision:
    target = target or Target()

    if credential is None:
        return _deny(UNAUTHENTICATED, "Authentication required")

    if action in (Action.MANAGE_MEDICATION, Action.LOG_INTAKE):
        if not credential.is_patient:
            return _deny(FORBIDDEN, "Only patients can manage or log their medications")
        # someone else's medication looks exactly like a missing one
        if not target.exists or (target.owner_id is not None and target.owner_id != credential.account_id):
            return _deny(NOT_FOUND, "Medication not found")
        return ALLOW

    if action == Action.MANAGE_CARE:
        if credential.is_caretaker:
            return ALLOW
        return _deny(FORBIDDEN, "Only caretakers can manage patients")

    if action == Action.READ_PATIENT:
        if not credential.is_caretaker:
            return _deny(FORBIDDEN, "Only caretakers can view patient data")
        if not target.linked:
            return _deny(FORBIDDEN, "Unauthorized to view this patient's data")
        return ALLOW

    if action == Action.READ_OWN:
        if target.owner_id is None or target.owner_id == credential.account_id:
            return ALLOW
        return _deny(FORBIDDEN, "Not allowed")

    return _deny(FORBIDDEN, "Not allowed")


def require(credential, action: Action, target: Target = None):
    """Like ``authorize`` but raises the matching MedTrackError on deny."""
    decision = authorize(credential, action, target)
    if not decision.allowed:
        raise ERRORS_BY_REASON[decision.reason](decision.message)
    return credential
