"""Progress Letter - Data Models"""
from .letter_state import (
    # Enums
    LetterField, StudentField,
    # Errors
    UnknownFieldError, validate_student_fields, new_student_id,
    # Snapshots
    StudentRecord, LetterState,
    LETTER_FIELD_NAMES, STUDENT_FIELD_NAMES,
)
from .rendered_letter import RenderedLetter

__all__ = [
    "LetterField", "StudentField",
    "UnknownFieldError", "validate_student_fields", "new_student_id",
    "StudentRecord", "LetterState",
    "LETTER_FIELD_NAMES", "STUDENT_FIELD_NAMES",
    "RenderedLetter",
]
