"""
Progress Letter - Rendering Engine

Takes a LetterState snapshot and renders the final plain-text letter.

The renderer is pure:
- No randomness, no clock, no I/O
- Same snapshot always produces byte-identical text
- Empty optional fields suppress their line instead of failing
"""
from __future__ import annotations
import logging
from typing import List

from ...models import LetterState, StudentRecord, RenderedLetter
from . import labels

logger = logging.getLogger(__name__)


def section_letter(index: int) -> str:
    """
    Section letter for the student at 0-based `index`.

    0 -> A ... 25 -> Z, then AA, AB, ... (spreadsheet column style).
    """
    if index < 0:
        raise ValueError(f"index must be >= 0, got {index}")
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


class LetterRenderer:
    """
    Render progress letters from LetterState.

    Input: LetterState snapshot
    Output: letter text (render) or RenderedLetter (render_document)
    """

    def render(self, state: LetterState) -> str:
        """
        Render the letter text.

        Args:
            state: LetterState snapshot

        Returns:
            The final letter; ends with the signature, no trailing newline
        """
        parts = [
            labels.SALUTATION.format(recipient=state.recipient),
            labels.SUBJECT.format(subject=state.subject),
        ]

        for index, student in enumerate(state.students):
            parts.append(self._render_student(index, student))

        if state.summary:
            parts.append(labels.SUMMARY.format(text=state.summary))
        if state.conditional:
            parts.append(labels.CONDITIONAL.format(text=state.conditional))
        if state.wishing:
            parts.append(labels.WISHING.format(text=state.wishing))

        parts.append(labels.SIGNATURE.format(signature=state.signature))

        # Every block is followed by one blank line
        return "\n\n".join(parts)

    def render_document(self, state: LetterState) -> RenderedLetter:
        """Render and wrap the text with preview metadata."""
        letter = RenderedLetter(
            content=self.render(state),
            student_count=len(state.students),
        )
        logger.info(
            f"Rendered letter: {letter.student_count} students, "
            f"{letter.word_count} words, hash={letter.content_hash()}"
        )
        return letter

    def _render_student(self, index: int, student: StudentRecord) -> str:
        """Render one student block: header plus the non-empty lines."""
        lines = [
            labels.STUDENT_HEADER.format(
                letter=section_letter(index),
                name=student.name or labels.STUDENT_NAME_PLACEHOLDER,
            )
        ]
        lines.extend(self._student_lines(student))
        return "\n".join(lines)

    def _student_lines(self, student: StudentRecord) -> List[str]:
        lines = []
        for field_name, label in labels.STUDENT_LINE_LABELS:
            if field_name is None:
                payment = self._render_payment(student)
                if payment:
                    lines.append(payment)
                continue
            value = getattr(student, field_name)
            if value:
                lines.append(f"- {label}: {value}")
        return lines

    def _render_payment(self, student: StudentRecord) -> str:
        """Payment line; present when either half is set, '...' fills the other."""
        period = student.next_payment_period
        amount = student.next_payment_amount
        if not (period or amount):
            return ""
        return labels.NEXT_PAYMENT.format(
            period=period or labels.PAYMENT_MISSING,
            amount=amount or labels.PAYMENT_MISSING,
        )


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

_renderer = None


def get_renderer() -> LetterRenderer:
    """Get or create the default renderer singleton."""
    global _renderer
    if _renderer is None:
        _renderer = LetterRenderer()
    return _renderer


def render_letter(state: LetterState) -> str:
    """
    Render a letter with the default renderer.

    Args:
        state: LetterState snapshot

    Returns:
        The final letter text
    """
    return get_renderer().render(state)


def render_document(state: LetterState) -> RenderedLetter:
    """Render a letter and return it with preview metadata."""
    return get_renderer().render_document(state)
