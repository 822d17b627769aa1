#!/usr/bin/env python3
"""
Letter Export Script
Renders a saved letter state (JSON) into a UTF-8 .txt file.

Usage:
    python -m scripts.export_letter <state.json> [output_dir] [context]

Example:
    python -m scripts.export_letter letter.json exports "Co Tuyet Anna"

The JSON layout is LetterState.to_dict(): recipient, subject, students[],
summary, conditional, wishing, signature.
"""
import json
import sys
import os

# Add the parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from progress_letter.models import LetterState
from progress_letter.services.export import export_letter


def export_from_file(state_path: str, output_dir: str = ".", context=None) -> str:
    """Load a state file, export the letter and return the written path."""
    with open(state_path, encoding="utf-8") as f:
        state = LetterState.from_dict(json.load(f))
    return str(export_letter(state, output_dir, context=context))


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.export_letter <state.json> [output_dir] [context]")
        sys.exit(1)

    state_path = sys.argv[1]
    output_dir = sys.argv[2] if len(sys.argv) > 2 else "."
    context = sys.argv[3] if len(sys.argv) > 3 else None

    try:
        path = export_from_file(state_path, output_dir, context)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Letter exported to {path}")
