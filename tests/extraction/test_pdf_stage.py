"""Tests for native PDF text extraction."""

from unittest.mock import MagicMock

import pytest

from recruit_memory.extraction import pdf_stage
from recruit_memory.extraction.pdf_stage import PdfTextStage
from recruit_memory.extraction.protocol import StageOutput
from recruit_memory.models import Document


def fake_pdf(page_texts):
    pdf = MagicMock()
    pdf.pages = [MagicMock(extract_text=MagicMock(return_value=text)) for text in page_texts]
    pdf.__enter__.return_value = pdf
    pdf.__exit__.return_value = False
    return pdf


@pytest.fixture
def patch_pdfplumber(monkeypatch):
    def _patch(page_texts):
        opener = MagicMock(return_value=fake_pdf(page_texts))
        monkeypatch.setattr(pdf_stage.pdfplumber, "open", opener)
        return opener

    return _patch


@pytest.mark.asyncio
async def test_extracts_all_pages_with_page_count(patch_pdfplumber):
    patch_pdfplumber(["Jane Doe\nEngineer", None, "Python  Go"])
    stage = PdfTextStage()

    output = await stage.extract(Document(content=b"%PDF-1.7", mime_type="application/pdf"))

    assert output.text == "Jane Doe Engineer Python Go"
    assert output.page_count == 3
    assert output.confidence is None


@pytest.mark.asyncio
async def test_parser_errors_propagate(monkeypatch):
    monkeypatch.setattr(pdf_stage.pdfplumber, "open", MagicMock(side_effect=ValueError("bad xref")))
    stage = PdfTextStage()

    with pytest.raises(ValueError):
        await stage.extract(Document(content=b"%PDF-1.7", mime_type="application/pdf"))


def test_accepts_only_substantial_text():
    stage = PdfTextStage()
    assert not stage.accepts(StageOutput(text="x" * 99))
    assert stage.accepts(StageOutput(text="x" * 100))


def test_custom_threshold():
    stage = PdfTextStage(min_length=10)
    assert stage.accepts(StageOutput(text="0123456789"))


def test_stage_flags():
    stage = PdfTextStage()
    assert stage.method == "pdf-text"
    assert stage.exclusive is False
    assert stage.fallthrough_on_error is True
