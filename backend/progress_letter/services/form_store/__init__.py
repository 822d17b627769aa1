"""
Form State Store - session-scoped letter editing

Components:
- FormStateStore: snapshot owner with update_field / add_student /
  remove_student / update_student
- SessionRegistry: in-memory map of session id -> store for the HTTP layer
"""

from .store import (
    FormStateStore,
    default_id_factory,
    new_student,
    seeded_state,
    blank_state,
)

from .sessions import (
    LetterSession,
    SessionRegistry,
    SessionNotFoundError,
    get_registry,
)

__all__ = [
    "FormStateStore",
    "default_id_factory",
    "new_student",
    "seeded_state",
    "blank_state",
    "LetterSession",
    "SessionRegistry",
    "SessionNotFoundError",
    "get_registry",
]
