"""Progress Letter - Rendering Engine

This layer takes a LetterState snapshot and renders the final letter text.
"""
from .engine import (
    LetterRenderer,
    get_renderer,
    render_letter,
    render_document,
    section_letter,
)

__all__ = [
    "LetterRenderer",
    "get_renderer",
    "render_letter",
    "render_document",
    "section_letter",
]
