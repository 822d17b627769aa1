"""
Rendered Letter Model

Output of the renderer. Carries the final text plus enough metadata for a
preview surface, and a content hash that proves render stability:
same state -> same text -> same hash.
"""

from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Dict


@dataclass(frozen=True)
class RenderedLetter:
    """Final letter text with traceability metadata."""
    content: str
    student_count: int

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def content_hash(self) -> str:
        """Deterministic hash of the letter text."""
        return sha256(self.content.encode("utf-8")).hexdigest()[:16]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "content": self.content,
            "student_count": self.student_count,
            "word_count": self.word_count,
            "content_hash": self.content_hash(),
        }
