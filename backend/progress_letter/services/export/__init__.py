"""Letter export - filename convention and UTF-8 text files."""
from .exporter import (
    EXPORT_PREFIX,
    MEDIA_TYPE,
    LetterExport,
    ascii_context,
    build_export_filename,
    build_export,
    export_letter,
)

__all__ = [
    "EXPORT_PREFIX",
    "MEDIA_TYPE",
    "LetterExport",
    "ascii_context",
    "build_export_filename",
    "build_export",
    "export_letter",
]
