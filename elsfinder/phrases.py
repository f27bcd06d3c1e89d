"""
Phrase list loading for els-finder.

Phrases come from repeatable --phrase options and/or a phrase file.
"""

from pathlib import Path
from typing import List, Optional


def load_phrases(
    strings: Optional[List[str]] = None,
    file_path: Optional[Path] = None,
) -> List[str]:
    """
    Load phrases from strings and/or file.

    Args:
        strings: Phrases given inline.
        file_path: Path to file with one phrase per line. Blank lines and
                   lines starting with '#' are skipped.

    Returns:
        Phrases in the order given, inline ones first, without exact
        duplicates.
    """
    phrases: List[str] = []

    if strings:
        for s in strings:
            if s and s.strip():
                phrases.append(s.strip())

    if file_path:
        if not file_path.exists():
            raise FileNotFoundError(f"Phrase file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                phrases.append(line)

    return list(dict.fromkeys(phrases))
