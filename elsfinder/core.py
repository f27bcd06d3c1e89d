"""
Core search orchestrator for els-finder.

Coordinates normalization, grid layout, matching, filtering, deduplication
and context extraction, and turns confirmed matches into MatchRecords.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from elsfinder.context import hidden_paragraph, highlight, literal_context
from elsfinder.extractors import extract_text, ExtractionError
from elsfinder.grid import Grid, build_grid, row_width
from elsfinder.locator import CandidateMatch, SearchCancelled, is_genuine, locate
from elsfinder.normalize import normalize_text

log = logging.getLogger(__name__)

Observer = Callable[[str, Dict[str, Any]], None]


class EmptyInputError(Exception):
    """Raised when the text to search is empty or whitespace only."""
    pass


class ExitCode(IntEnum):
    """Exit codes for scan results."""
    FOUND = 0      # At least one ELS reported
    NOT_FOUND = 1  # Search completed without matches
    ERROR = 2      # Unreadable document or nothing to search


@dataclass
class SearchParameters:
    """Tunable knobs of a search run."""
    min_distance: int = 1
    max_distance: int = 100
    paragraph_length: int = 200
    context_radius: int = 20
    genuine_window: int = 3

    def validate(self) -> None:
        """Raise ValueError for parameters that cannot describe a search."""
        if self.min_distance < 1:
            raise ValueError(f"min_distance must be >= 1, got {self.min_distance}")
        if self.max_distance < self.min_distance:
            raise ValueError(
                f"max_distance ({self.max_distance}) must be >= "
                f"min_distance ({self.min_distance})"
            )
        if self.paragraph_length < 1:
            raise ValueError(
                f"paragraph_length must be >= 1, got {self.paragraph_length}"
            )
        if self.context_radius < 0:
            raise ValueError(f"context_radius must be >= 0, got {self.context_radius}")
        if self.genuine_window < 1:
            raise ValueError(f"genuine_window must be >= 1, got {self.genuine_window}")


@dataclass(frozen=True)
class MatchRecord:
    """A reported ELS hit with its surrounding context."""
    phrase: str
    normalized: str
    x: int
    y: int
    stride: int
    direction: str
    dx: int
    dy: int
    letters: str
    positions: Tuple[Tuple[int, int], ...]
    linear_distance: int  # signed; second letter index minus first, 0 for one letter
    start_offset: int
    hidden_paragraph: str
    highlighted_paragraph: str
    context: str

    @property
    def key(self) -> tuple:
        return (self.phrase, self.x, self.y, self.stride, self.dx, self.dy)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phrase": self.phrase,
            "normalized": self.normalized,
            "start": {"x": self.x, "y": self.y, "offset": self.start_offset},
            "stride": self.stride,
            "direction": self.direction,
            "letters": self.letters,
            "positions": [list(p) for p in self.positions],
            "linear_distance": self.linear_distance,
            "hidden_paragraph": self.hidden_paragraph,
            "highlighted_paragraph": self.highlighted_paragraph,
            "context": self.context,
        }


@dataclass
class ScanResult:
    """Result of scanning one document."""
    exit_code: ExitCode
    records: List[MatchRecord] = field(default_factory=list)
    error: Optional[str] = None
    text_length: int = 0
    pages: int = 0
    ocr_performed: bool = False

    @property
    def found(self) -> bool:
        """Return True if at least one ELS was reported."""
        return self.exit_code == ExitCode.FOUND

    @property
    def not_found(self) -> bool:
        """Return True if the search ran and found nothing."""
        return self.exit_code == ExitCode.NOT_FOUND

    @property
    def errored(self) -> bool:
        """Return True if an error occurred."""
        return self.exit_code == ExitCode.ERROR


def build_record(
    grid: Grid,
    original: str,
    match: CandidateMatch,
    params: SearchParameters,
) -> MatchRecord:
    """Assemble the reported form of a confirmed match."""
    first = match.positions[0]
    if len(match.positions) > 1:
        second = match.positions[1]
        linear_distance = (grid.linear_index(second.x, second.y)
                           - grid.linear_index(first.x, first.y))
    else:
        linear_distance = 0

    paragraph = hidden_paragraph(grid, match, params.paragraph_length)
    return MatchRecord(
        phrase=match.phrase,
        normalized=match.normalized,
        x=match.x,
        y=match.y,
        stride=match.stride,
        direction=match.direction.label,
        dx=match.direction.dx,
        dy=match.direction.dy,
        letters=match.letters,
        positions=tuple((p.x, p.y) for p in match.positions),
        linear_distance=linear_distance,
        start_offset=grid.linear_index(match.x, match.y),
        hidden_paragraph=paragraph,
        highlighted_paragraph=highlight(paragraph, match.letters, params.paragraph_length),
        context=literal_context(original, match.positions, grid.width, params.context_radius),
    )


def search(
    text: str,
    phrases: Sequence[str],
    min_distance: int = 1,
    max_distance: int = 100,
    *,
    params: Optional[SearchParameters] = None,
    observer: Optional[Observer] = None,
    cancel: Optional[Callable[[], bool]] = None,
) -> List[MatchRecord]:
    """
    Search text for equidistant letter sequences spelling each phrase.

    Args:
        text: Raw, unnormalized text.
        phrases: Phrases to look for. Phrases that normalize to nothing
                 are skipped.
        min_distance: Smallest stride. Leave at the default when passing
                      `params`.
        max_distance: Largest stride. Leave at the default when passing
                      `params`.
        params: Full parameter set, including the distances.
        observer: Called as observer(event, info) at "grid_built",
                  "phrase_started" and "match_found".
        cancel: Polled between phrases and start cells; returning True
                aborts the search.

    Returns:
        MatchRecords in discovery order. An empty list means the search ran
        and found nothing.

    Raises:
        ValueError: If the parameters are invalid, or if distances
                    are passed alongside `params`.
        EmptyInputError: If `text` is empty or blank.
        SearchCancelled: If `cancel` asked the search to stop.
    """
    if params is None:
        params = SearchParameters(min_distance=min_distance, max_distance=max_distance)
    elif (min_distance, max_distance) != (1, 100):
        raise ValueError(
            "Pass min_distance/max_distance inside params, not alongside it"
        )
    params.validate()

    if not text or not text.strip():
        raise EmptyInputError("Text to search is empty")

    log.debug("Original text has %d characters", len(text))
    normalized_text = normalize_text(text)
    width = row_width(len(normalized_text))
    grid = build_grid(normalized_text, width)
    log.info(
        "Grid built: %d characters, %d rows x %d columns",
        len(normalized_text), grid.row_count, width,
    )
    _notify(observer, "grid_built", {
        "length": len(normalized_text),
        "width": width,
        "rows": grid.row_count,
    })

    records: List[MatchRecord] = []
    seen: Set[tuple] = set()

    for phrase in phrases:
        if cancel is not None and cancel():
            raise SearchCancelled("Search cancelled by caller")

        normalized = normalize_text(phrase)
        if not normalized:
            log.debug("Skipping phrase %r: nothing left after normalization", phrase)
            continue

        log.info("Searching phrase %r (normalized: %s)", phrase, normalized)
        _notify(observer, "phrase_started", {"phrase": phrase, "normalized": normalized})

        for match in locate(grid, phrase, normalized, params.min_distance,
                            params.max_distance, cancel=cancel):
            if match.key in seen:
                continue
            seen.add(match.key)

            if not is_genuine(grid, match, params.genuine_window):
                continue

            record = build_record(grid, text, match, params)
            records.append(record)
            log.info(
                "ELS found for %r: %s, distance %d, %s",
                phrase, record.letters, record.stride, record.direction,
            )
            _notify(observer, "match_found", {"record": record})

    return records


def scan_file(
    path: Path,
    phrases: Sequence[str],
    params: Optional[SearchParameters] = None,
    ocr_mode: str = "off",
) -> ScanResult:
    """
    Extract a document's text and search it for the given phrases.

    Args:
        path: Path to a PDF or plain-text file.
        phrases: Phrases to look for.
        params: Search parameters (defaults when None).
        ocr_mode: OCR behavior - "off", "auto", or "always".

    Returns:
        ScanResult with exit code, records, and extraction metadata.
    """
    if params is None:
        params = SearchParameters()

    try:
        corpus = extract_text(path, ocr_mode=ocr_mode)
    except ExtractionError as e:
        return ScanResult(exit_code=ExitCode.ERROR, error=str(e))
    except Exception as e:
        return ScanResult(
            exit_code=ExitCode.ERROR,
            error=f"Unexpected error reading document: {e}",
        )

    text = corpus.full_text
    try:
        records = search(text, phrases, params=params)
    except EmptyInputError:
        return ScanResult(
            exit_code=ExitCode.ERROR,
            error="No text could be extracted from the document",
            pages=corpus.pages,
            ocr_performed=corpus.ocr_performed,
        )

    return ScanResult(
        exit_code=ExitCode.FOUND if records else ExitCode.NOT_FOUND,
        records=records,
        text_length=len(text),
        pages=corpus.pages,
        ocr_performed=corpus.ocr_performed,
    )


def _notify(observer: Optional[Observer], event: str, info: Dict[str, Any]) -> None:
    if observer is not None:
        observer(event, info)
