from .user import User, Role
from .medication import Medication, Frequency
from .medication_log import MedicationLog
from .caretaker_patient import CaretakerPatient
