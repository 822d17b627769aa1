"""
Letter Exporter

Turns a rendered letter into a downloadable plain-text file.

Filename convention:
    Bao_cao_IELTS_<context>_<DD-MM-YYYY>.txt

The file content is exactly the renderer output, encoded as UTF-8.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from ... import config
from ...models import LetterState
from ..renderer import render_letter

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "Bao_cao_IELTS"
MEDIA_TYPE = "text/plain; charset=utf-8"

# NFKD leaves these intact; they have no combining-mark decomposition
_ASCII_OVERRIDES = str.maketrans({"đ": "d", "Đ": "D"})


def ascii_context(text: str) -> str:
    """
    Fold free text into a filename-safe ASCII token.

    "Cô Tuyết Anna" -> "Co_Tuyet_Anna"
    """
    folded = unicodedata.normalize("NFKD", text.translate(_ASCII_OVERRIDES))
    folded = folded.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^A-Za-z0-9]+", "_", folded).strip("_")


def build_export_filename(context: str = "", on_date: Optional[date] = None) -> str:
    """
    Build the suggested download filename.

    Args:
        context: who/what the letter is about; folded to ASCII
        on_date: date stamp (defaults to today)
    """
    stamp = (on_date or date.today()).strftime("%d-%m-%Y")
    token = ascii_context(context)
    if token:
        return f"{EXPORT_PREFIX}_{token}_{stamp}.txt"
    return f"{EXPORT_PREFIX}_{stamp}.txt"


@dataclass(frozen=True)
class LetterExport:
    """A finished export: filename plus UTF-8 text content."""
    filename: str
    content: str
    media_type: str = MEDIA_TYPE

    def encoded(self) -> bytes:
        return self.content.encode("utf-8")


def build_export(
    state: LetterState,
    context: Optional[str] = None,
    on_date: Optional[date] = None,
) -> LetterExport:
    """
    Render `state` and name the result.

    The context falls back to LETTER_EXPORT_CONTEXT, then to the recipient.
    """
    if context is None:
        context = config.EXPORT_CONTEXT or state.recipient
    return LetterExport(
        filename=build_export_filename(context, on_date),
        content=render_letter(state),
    )


def export_letter(
    state: LetterState,
    directory,
    context: Optional[str] = None,
    on_date: Optional[date] = None,
) -> Path:
    """
    Write the rendered letter into `directory` and return the file path.

    The directory is created when missing.
    """
    export = build_export(state, context=context, on_date=on_date)
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export.filename
    path.write_bytes(export.encoded())
    logger.info(f"Exported letter to {path} ({len(export.content)} chars)")
    return path
