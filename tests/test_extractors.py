import logging
import sys
import types

import fitz
import pytest

from elsfinder.extractors import ExtractionError, extract_text


def _make_pdf(path, pages):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()


def test_plain_text_file(tmp_path):
    path = tmp_path / "book.txt"
    path.write_text("En el principio\ncreó Dios", encoding="utf-8")
    corpus = extract_text(path)
    assert corpus.full_text == "En el principio\ncreó Dios"
    assert corpus.pages == 1
    assert not corpus.ocr_performed


def test_pdf_pages_joined_with_newlines(tmp_path):
    path = tmp_path / "two.pdf"
    _make_pdf(path, ["Hello", "World"])
    corpus = extract_text(path)
    assert corpus.pages == 2
    assert corpus.full_text == "Hello\nWorld"
    assert [f.page for f in corpus.fragments] == [0, 1]
    assert {f.source for f in corpus.fragments} == {"content"}


def test_pdf_blank_pages_contribute_nothing(tmp_path):
    path = tmp_path / "blank.pdf"
    _make_pdf(path, [""])
    corpus = extract_text(path)
    assert corpus.pages == 1
    assert corpus.full_text == ""


def test_missing_file(tmp_path):
    with pytest.raises(ExtractionError):
        extract_text(tmp_path / "missing.pdf")


def test_broken_pdf(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")
    with pytest.raises(ExtractionError):
        extract_text(path)


def test_unknown_ocr_mode(tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("abc", encoding="utf-8")
    with pytest.raises(ValueError):
        extract_text(path, ocr_mode="sometimes")


class FakeTesseract(types.ModuleType):
    """Stands in for pytesseract; returns one canned string per OCR call."""

    def __init__(self, outputs):
        super().__init__("pytesseract")
        self.pytesseract = types.SimpleNamespace(tesseract_cmd="tesseract")
        self.outputs = list(outputs)
        self.calls = 0

    def get_tesseract_version(self):
        return "5.0.0"

    def image_to_string(self, img):
        self.calls += 1
        return self.outputs.pop(0)


@pytest.fixture
def fake_ocr(monkeypatch):
    def install(*outputs):
        tess = FakeTesseract(outputs)
        pil = types.ModuleType("PIL")
        pil.Image = types.SimpleNamespace(open=lambda data: data)
        monkeypatch.setitem(sys.modules, "pytesseract", tess)
        monkeypatch.setitem(sys.modules, "PIL", pil)
        return tess
    return install


def test_auto_ocr_only_touches_pages_without_text(tmp_path, fake_ocr):
    path = tmp_path / "scan.pdf"
    _make_pdf(path, ["", "Typed page"])
    tess = fake_ocr("  scanned page  ")
    corpus = extract_text(path, ocr_mode="auto")
    assert tess.calls == 1
    assert corpus.ocr_performed
    assert [(f.source, f.page, f.text) for f in corpus.fragments] == [
        ("ocr", 0, "scanned page"),
        ("content", 1, "Typed page"),
    ]


def test_always_ocr_replaces_every_page(tmp_path, fake_ocr):
    path = tmp_path / "scan.pdf"
    _make_pdf(path, ["", "Typed page"])
    tess = fake_ocr("first", "second")
    corpus = extract_text(path, ocr_mode="always")
    assert tess.calls == 2
    assert corpus.ocr_performed
    assert all(f.source == "ocr" for f in corpus.fragments)
    assert corpus.full_text == "first\nsecond"


def test_empty_ocr_result_keeps_page_text(tmp_path, fake_ocr):
    path = tmp_path / "scan.pdf"
    _make_pdf(path, ["Typed page"])
    fake_ocr("   ")
    corpus = extract_text(path, ocr_mode="always")
    assert corpus.ocr_performed
    assert [(f.source, f.text) for f in corpus.fragments] == [("content", "Typed page")]


def test_ocr_off_never_calls_tesseract(tmp_path, fake_ocr):
    path = tmp_path / "scan.pdf"
    _make_pdf(path, ["", "Typed page"])
    tess = fake_ocr()
    corpus = extract_text(path)
    assert tess.calls == 0
    assert not corpus.ocr_performed


def test_missing_ocr_libraries_warn_and_skip(tmp_path, monkeypatch, caplog):
    monkeypatch.setitem(sys.modules, "pytesseract", None)
    path = tmp_path / "scan.pdf"
    _make_pdf(path, ["", "Typed page"])
    with caplog.at_level(logging.WARNING, logger="elsfinder.extractors"):
        corpus = extract_text(path, ocr_mode="always")
    assert not corpus.ocr_performed
    assert [(f.source, f.text) for f in corpus.fragments] == [("content", "Typed page")]
    assert "pytesseract/Pillow not installed" in caplog.text
