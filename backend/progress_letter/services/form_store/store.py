"""
Form State Store

Holds the current LetterState snapshot and funnels every edit through four
operations:

    update_field(field, value)
    add_student()
    remove_student(id)
    update_student(id, partial_fields)

Each operation swaps in a new snapshot. Snapshots handed out earlier are
never mutated, so an observer holding one keeps a consistent view.

The store does not enforce a minimum number of students. Keeping the first
entry is a presentation policy (see routers/letters.py).
"""

import logging
from typing import Callable, Dict, List, Optional

from ... import config
from ...models import (
    LetterField,
    LetterState,
    StudentRecord,
    new_student_id,
    validate_student_fields,
)
from ..renderer import render_letter

logger = logging.getLogger(__name__)

Listener = Callable[[LetterState], None]


default_id_factory = new_student_id


def new_student(id_factory: Callable[[], str] = default_id_factory) -> StudentRecord:
    """A StudentRecord with a fresh identifier and every text field empty."""
    return StudentRecord(id=id_factory())


def seeded_state(id_factory: Callable[[], str] = default_id_factory) -> LetterState:
    """The state a new session opens with: configured defaults plus one empty student."""
    return LetterState(
        recipient=config.DEFAULT_RECIPIENT,
        subject=config.DEFAULT_SUBJECT,
        students=(new_student(id_factory),),
        summary=config.DEFAULT_SUMMARY,
        conditional=config.DEFAULT_CONDITIONAL,
        wishing=config.DEFAULT_WISHING,
        signature=config.DEFAULT_SIGNATURE,
    )


def blank_state(id_factory: Callable[[], str] = default_id_factory) -> LetterState:
    """All letter fields empty, one empty student."""
    return LetterState(students=(new_student(id_factory),))


class FormStateStore:
    """
    Owner of the in-memory letter snapshot.

    Args:
        initial: starting snapshot (defaults to seeded_state())
        id_factory: callable producing unique student identifiers
    """

    def __init__(
        self,
        initial: Optional[LetterState] = None,
        id_factory: Callable[[], str] = default_id_factory,
    ):
        self._id_factory = id_factory
        self._state = initial if initial is not None else seeded_state(id_factory)
        self._listeners: List[Listener] = []
        # Every id handed out so far, removed students included
        self._issued_ids = set(self._state.student_ids())

    @property
    def snapshot(self) -> LetterState:
        """The current immutable snapshot."""
        return self._state

    # =========================================================================
    # OBSERVERS
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register `listener` to receive every new snapshot.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: LetterState, action: str) -> LetterState:
        if state is self._state:
            return state
        self._state = state
        logger.debug(f"Store transition: {action} ({len(state.students)} students)")
        for listener in list(self._listeners):
            listener(state)
        return state

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def update_field(self, field, value: str) -> LetterState:
        """Set a letter-level field. Content is never validated."""
        state = self._state.with_field(field, value)
        return self._commit(state, f"update_field {LetterField(field).value}")

    def add_student(self) -> StudentRecord:
        """Append an empty student with a fresh identifier and return it."""
        student = new_student(self._id_factory)
        if student.id in self._issued_ids:
            raise ValueError(f"id_factory reused student id '{student.id}'")
        self._issued_ids.add(student.id)
        self._commit(
            self._state.with_students(self._state.students + (student,)),
            f"add_student {student.id}",
        )
        return student

    def remove_student(self, student_id: str) -> LetterState:
        """Remove the matching student. Unknown ids are a no-op."""
        if self._state.find_student(student_id) is None:
            return self._state
        remaining = [s for s in self._state.students if s.id != student_id]
        return self._commit(self._state.with_students(remaining), f"remove_student {student_id}")

    def update_student(self, student_id: str, partial_fields: Dict[str, str]) -> LetterState:
        """
        Merge `partial_fields` into the matching student.

        Fields absent from the mapping keep their value. Unknown ids are a
        no-op; unknown field names raise UnknownFieldError.
        """
        validate_student_fields(partial_fields)
        target = self._state.find_student(student_id)
        if target is None:
            return self._state
        updated = target.merged(partial_fields)
        students = [updated if s.id == student_id else s for s in self._state.students]
        return self._commit(self._state.with_students(students), f"update_student {student_id}")

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def get_rendered_letter(self) -> str:
        """Letter text for the current snapshot."""
        return render_letter(self._state)
