"""Unit tests for export naming and page arithmetic."""

import pytest

from resume_revamp.exporter import MIME_TYPES, ExportKind, export_filename, page_count


@pytest.mark.unit
@pytest.mark.parametrize("name, kind, expected", [
    ("Alex Morgan", ExportKind.PDF, "Alex_Morgan_Resume.pdf"),
    ("Mary  Jane\tWatson", ExportKind.DOCX, "Mary_Jane_Watson_Resume.docx"),
    ("Cher", "pdf", "Cher_Resume.pdf"),
])
def test_export_filename(name, kind, expected):
    assert export_filename(name, kind) == expected


@pytest.mark.unit
def test_mime_types():
    assert MIME_TYPES[ExportKind.PDF] == "application/pdf"
    assert MIME_TYPES[ExportKind.DOCX].endswith("wordprocessingml.document")


@pytest.mark.unit
@pytest.mark.parametrize("width, height, pages", [
    (210, 100, 1),
    (210, 297, 1),
    (210, 298, 2),
    (1000, 1414, 1),
    (1000, 2900, 3),
])
def test_page_count(width, height, pages):
    assert page_count(width, height) == pages
