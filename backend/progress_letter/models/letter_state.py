"""
Progress Letter - Form State Models

These models are the ONLY data structures shared by the store, the renderer
and the HTTP layer.

Core Principle: a LetterState is a snapshot. Snapshots are frozen; every edit
produces a new snapshot and never touches an older one.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, Tuple
from uuid import uuid4


# =============================================================================
# ENUMS
# =============================================================================

class LetterField(str, Enum):
    """Letter-level scalar fields editable through update_field."""
    RECIPIENT = "recipient"
    SUBJECT = "subject"
    SUMMARY = "summary"
    CONDITIONAL = "conditional"
    WISHING = "wishing"
    SIGNATURE = "signature"


class StudentField(str, Enum):
    """Editable StudentRecord fields. The identifier is never editable."""
    NAME = "name"
    STRENGTHS = "strengths"
    IMPROVEMENTS = "improvements"
    PRAISE = "praise"
    PAID_UNTIL = "paid_until"
    NEXT_PAYMENT_PERIOD = "next_payment_period"
    NEXT_PAYMENT_AMOUNT = "next_payment_amount"
    SESSION_DETAILS = "session_details"
    NOTE = "note"
    COMMITMENT = "commitment"
    STRATEGY = "strategy"


class UnknownFieldError(ValueError):
    """Raised when an update names a field the model does not have."""

    def __init__(self, name: str, allowed):
        self.name = name
        self.allowed = sorted(allowed)
        super().__init__(f"Unknown field '{name}' (expected one of: {', '.join(self.allowed)})")


LETTER_FIELD_NAMES = frozenset(f.value for f in LetterField)
STUDENT_FIELD_NAMES = frozenset(f.value for f in StudentField)


def _field_name(name, allowed) -> str:
    """Normalize an enum member or plain string to a checked field name."""
    key = name.value if isinstance(name, Enum) else name
    if key not in allowed:
        raise UnknownFieldError(str(key), allowed)
    return key


def validate_student_fields(names) -> None:
    """Raise UnknownFieldError for the first name that is not a StudentField."""
    for name in names:
        _field_name(name, STUDENT_FIELD_NAMES)


def new_student_id() -> str:
    """Fresh opaque student identifier."""
    return uuid4().hex


def _text(value) -> str:
    """JSON null becomes an empty field; anything else is kept as text."""
    return "" if value is None else str(value)


# =============================================================================
# STUDENT RECORD
# =============================================================================

@dataclass(frozen=True)
class StudentRecord:
    """
    One student (or student group) entry of the letter.

    All text fields are freeform and start empty. `id` is opaque and
    assigned once at creation.
    """
    id: str
    name: str = ""
    strengths: str = ""
    improvements: str = ""
    praise: str = ""
    paid_until: str = ""
    next_payment_period: str = ""
    next_payment_amount: str = ""
    session_details: str = ""
    note: str = ""
    commitment: str = ""
    strategy: str = ""

    def merged(self, updates: Dict[Any, str]) -> "StudentRecord":
        """Return a copy with `updates` applied. Keys are checked first."""
        changes = {_field_name(k, STUDENT_FIELD_NAMES): v for k, v in updates.items()}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# LETTER STATE
# =============================================================================

@dataclass(frozen=True)
class LetterState:
    """
    The whole document under composition.

    - recipient / signature: always rendered, may be empty
    - subject: always rendered, may be empty
    - summary / conditional / wishing: omitted from the letter when empty
    - students: ordered; order decides the section letters A, B, C, ...
    """
    recipient: str = ""
    subject: str = ""
    students: Tuple[StudentRecord, ...] = field(default_factory=tuple)
    summary: str = ""
    conditional: str = ""
    wishing: str = ""
    signature: str = ""

    def __post_init__(self):
        # Lists sneak in from callers; freeze them so the snapshot stays immutable
        if not isinstance(self.students, tuple):
            object.__setattr__(self, "students", tuple(self.students))

    def with_field(self, name, value: str) -> "LetterState":
        """Return a copy with one letter-level field set."""
        return replace(self, **{_field_name(name, LETTER_FIELD_NAMES): value})

    def with_students(self, students) -> "LetterState":
        """Return a copy with a new students sequence."""
        return replace(self, students=tuple(students))

    def find_student(self, student_id: str):
        """Return the StudentRecord with `student_id`, or None."""
        for student in self.students:
            if student.id == student_id:
                return student
        return None

    def student_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.students)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "recipient": self.recipient,
            "subject": self.subject,
            "students": [s.to_dict() for s in self.students],
            "summary": self.summary,
            "conditional": self.conditional,
            "wishing": self.wishing,
            "signature": self.signature,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        id_factory: Callable[[], str] = new_student_id,
    ) -> "LetterState":
        """
        Rebuild a snapshot from `to_dict()` output or hand-written JSON.

        Null values become "". A student whose id is missing, empty or
        already used earlier in the list gets a fresh one from `id_factory`.
        """
        students = []
        seen = set()
        for s in data.get("students") or []:
            values = {k: _text(v) for k, v in s.items() if k in STUDENT_FIELD_NAMES}
            student_id = _text(s.get("id"))
            while not student_id or student_id in seen:
                student_id = id_factory()
            seen.add(student_id)
            students.append(StudentRecord(id=student_id, **values))
        scalars = {k: _text(data.get(k)) for k in LETTER_FIELD_NAMES}
        return cls(students=tuple(students), **scalars)
