"""
Document text extraction for els-finder.

Turns a source file into the plain text the search runs over:
- PDF page text via PyMuPDF
- OCR of page images (optional, for scanned documents)
- Plain text files read as UTF-8

The search only ever sees the joined text; page boundaries become newlines.
"""

import io
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import fitz  # PyMuPDF

log = logging.getLogger(__name__)

OCR_MODES = ("off", "auto", "always")

_PDF_SUFFIXES = {".pdf"}


class ExtractionError(Exception):
    """Raised when a document cannot be read."""
    pass


@dataclass
class TextFragment:
    """A fragment of extracted text with source metadata."""
    text: str
    source: str  # "content", "ocr" or "plain"
    page: Optional[int] = None


@dataclass
class Corpus:
    """All text extracted from one document."""
    fragments: List[TextFragment] = field(default_factory=list)
    pages: int = 0
    ocr_performed: bool = False

    @property
    def full_text(self) -> str:
        """Return the document text with fragments separated by newlines."""
        return "\n".join(f.text for f in self.fragments if f.text)


def extract_text(path: Path, ocr_mode: str = "off") -> Corpus:
    """
    Extract the searchable text of a document.

    Args:
        path: Path to a PDF or text file.
        ocr_mode: "off", "auto" (OCR pages without a text layer), or
                  "always" (OCR every page instead of its text layer).
                  Ignored for non-PDF files.

    Returns:
        Corpus containing the extracted fragments.

    Raises:
        ExtractionError: If the file is missing or cannot be read.
    """
    if ocr_mode not in OCR_MODES:
        raise ValueError(f"ocr_mode must be one of {OCR_MODES}, got {ocr_mode!r}")

    path = Path(path)
    if not path.exists():
        raise ExtractionError(f"File not found: {path}")

    if path.suffix.lower() in _PDF_SUFFIXES:
        return _extract_pdf(path, ocr_mode)
    return _extract_plain(path)


def _extract_plain(path: Path) -> Corpus:
    """Read a text file as UTF-8."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ExtractionError(f"Failed to read file: {e}") from e

    corpus = Corpus(pages=1)
    corpus.fragments.append(TextFragment(text=text, source="plain"))
    return corpus


def _extract_pdf(path: Path, ocr_mode: str) -> Corpus:
    try:
        doc = fitz.open(str(path))
    except Exception as e:
        raise ExtractionError(f"Failed to open PDF: {e}") from e

    corpus = Corpus(pages=len(doc))
    log.info("PDF opened: %s (%d pages)", path, corpus.pages)

    try:
        texts = [page.get_text("text") for page in doc]

        ocr_pages: List[int] = []
        if ocr_mode == "always":
            ocr_pages = list(range(len(texts)))
        elif ocr_mode == "auto":
            ocr_pages = [i for i, t in enumerate(texts) if not t.strip()]

        ocr_texts = _ocr_pages(doc, ocr_pages, corpus) if ocr_pages else {}

        for page_num, text in enumerate(texts):
            if page_num in ocr_texts:
                corpus.fragments.append(TextFragment(
                    text=ocr_texts[page_num],
                    source="ocr",
                    page=page_num,
                ))
            elif text and text.strip():
                corpus.fragments.append(TextFragment(
                    text=text.strip(),
                    source="content",
                    page=page_num,
                ))
    finally:
        doc.close()

    log.info("Extracted %d characters from %s", len(corpus.full_text), path)
    return corpus


def _ocr_pages(doc: fitz.Document, page_numbers: List[int], corpus: Corpus) -> dict:
    """
    Run OCR on the given pages and return {page_number: text}.

    Requires: pytesseract, Pillow, and the Tesseract OCR binary installed.
    Pages whose OCR fails or yields nothing are left out.
    """
    try:
        import pytesseract
        from PIL import Image
    except ImportError:
        log.warning(
            "OCR requested but pytesseract/Pillow not installed. "
            "Install with: pip install els-finder[ocr]"
        )
        return {}

    # Try default Windows installation paths if not on PATH
    if not shutil.which("tesseract"):
        default_paths = [
            r"C:\Program Files\Tesseract-OCR\tesseract.exe",
            r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
        ]
        for p in default_paths:
            if Path(p).exists():
                pytesseract.pytesseract.tesseract_cmd = p
                break

    try:
        pytesseract.get_tesseract_version()
    except Exception:
        log.warning(
            "Tesseract OCR not found. "
            "Install from: https://github.com/UB-Mannheim/tesseract/wiki"
        )
        return {}

    corpus.ocr_performed = True
    results = {}
    for page_num in page_numbers:
        page = doc[page_num]
        # Render at 2x zoom for better OCR
        pix = page.get_pixmap(matrix=fitz.Matrix(2.0, 2.0))
        img = Image.open(io.BytesIO(pix.tobytes("png")))
        try:
            ocr_text = pytesseract.image_to_string(img)
        except Exception as e:
            log.warning("OCR failed on page %d: %s", page_num, e)
            continue
        if ocr_text and ocr_text.strip():
            results[page_num] = ocr_text.strip()
    return results
