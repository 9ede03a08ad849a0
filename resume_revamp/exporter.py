"""
Résumé export adapters.

• DOCX – composed natively with python-docx (not a picture of the preview)
• PDF  – the rendered preview is rasterised with headless Chromium
         (Playwright), fitted to A4 width and sliced into A4-height pages
         (Pillow) which reportlab assembles into one document

Exports read the record they are given and never modify it.
"""

from __future__ import annotations
import io, logging, math, re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt
from PIL import Image
from playwright.sync_api import sync_playwright
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from . import config
from .errors import ExportError
from .generator_rule import PREVIEW_ELEMENT_ID
from .schema_resume import ResumeRecord

logger = logging.getLogger(__name__)

_WS = re.compile(r"\s+")

# A4 in millimetres
PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297


class ExportKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


MIME_TYPES = {
    ExportKind.PDF: "application/pdf",
    ExportKind.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass(frozen=True)
class ExportResult:
    filename: str
    data: bytes
    mime: str


def export_filename(full_name: str, kind: ExportKind) -> str:
    return f"{_WS.sub('_', full_name)}_Resume.{ExportKind(kind).value}"


# ───────────────────────────────────────── DOCX ──
def _bottom_rule(paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    border = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "12")
    bottom.set(qn("w:color"), "999999")
    border.append(bottom)
    p_pr.append(border)


def _spacing(paragraph, before: float = 0, after: float = 0) -> None:
    paragraph.paragraph_format.space_before = Pt(before)
    paragraph.paragraph_format.space_after = Pt(after)


def _tabbed_line(doc, left: str, right: str, text_width,
                 bold=(False, False), italic=False, size=None):
    """Left text with `right` pushed to a right-aligned tab at the margin."""
    p = doc.add_paragraph()
    p.paragraph_format.tab_stops.add_tab_stop(text_width, WD_TAB_ALIGNMENT.RIGHT)
    left_run = p.add_run(left)
    right_run = p.add_run(f"\t{right}")
    for run, strong in zip((left_run, right_run), bold):
        run.bold = strong
        run.italic = italic
    if size:
        left_run.font.size = Pt(size)
    return p


def _heading(doc, text: str, before: float, after: float) -> None:
    _spacing(doc.add_heading(text, level=3), before, after)


def build_docx(record: ResumeRecord) -> bytes:
    doc = Document()
    section = doc.sections[0]
    for side in ("top_margin", "right_margin", "bottom_margin", "left_margin"):
        setattr(section, side, Inches(0.5))
    text_width = section.page_width - section.left_margin - section.right_margin

    # header: name, title, contact line with a rule under it
    name = doc.add_heading(record.full_name, level=0)
    name.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _spacing(name, after=5)

    title = doc.add_heading(record.job_title, level=2)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _spacing(title, after=10)

    c = record.contact
    contact = doc.add_paragraph()
    contact.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = contact.add_run(" | ".join(
        v for v in (c.email, c.phone, c.location, c.linkedin, c.website) if v
    ))
    run.font.size = Pt(10)
    _spacing(contact, after=20)
    _bottom_rule(contact)

    _heading(doc, "PROFESSIONAL SUMMARY", 10, 5)
    _spacing(doc.add_paragraph(record.summary), after=15)

    _heading(doc, "SKILLS", 10, 5)
    _spacing(doc.add_paragraph(", ".join(record.skills)), after=15)

    _heading(doc, "EXPERIENCE", 10, 10)
    for exp in record.experience:
        _spacing(
            _tabbed_line(doc, exp.role, exp.dates, text_width, bold=(True, True), size=12),
            before=5,
        )
        _spacing(
            _tabbed_line(doc, exp.company, exp.location or "", text_width, italic=True),
            after=5,
        )
        for line in exp.description:
            _spacing(doc.add_paragraph(line, style="List Bullet"), after=2.5)
        _spacing(doc.add_paragraph(""), after=10)

    _heading(doc, "EDUCATION", 5, 10)
    for edu in record.education:
        _tabbed_line(doc, edu.school, edu.dates, text_width, bold=(True, False))
        degree = doc.add_paragraph()
        degree.add_run(edu.degree).italic = True
        _spacing(degree, after=5)

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def export_docx(record: ResumeRecord) -> ExportResult:
    try:
        data = build_docx(record)
    except Exception as e:
        raise ExportError(f"DOCX generation failed: {e}") from e
    return ExportResult(
        filename=export_filename(record.full_name, ExportKind.DOCX),
        data=data,
        mime=MIME_TYPES[ExportKind.DOCX],
    )


# ───────────────────────────────────────── PDF ──
Rasterizer = Callable[[str], bytes]


def rasterize_html(html: str, scale: float | None = None) -> bytes:
    """Screenshot the preview element of `html` as PNG bytes."""
    scale = scale or config.PDF_RENDER_SCALE
    with sync_playwright() as p:
        browser = p.chromium.launch()
        try:
            page = browser.new_page(
                viewport={"width": 900, "height": 1200}, device_scale_factor=scale
            )
            page.set_content(html, wait_until="load")
            return page.locator(f"#{PREVIEW_ELEMENT_ID}").screenshot(type="png")
        finally:
            browser.close()


def page_count(image_width: int, image_height: int) -> int:
    height_mm = image_height * PAGE_WIDTH_MM / image_width
    return max(1, math.ceil(height_mm / PAGE_HEIGHT_MM - 1e-9))


def paginate_png(png: bytes) -> bytes:
    """Fit the image to A4 width and emit one page per A4-height slice."""
    with Image.open(io.BytesIO(png)) as img:
        img = img.convert("RGB")
        width, height = img.size
        if not width or not height:
            raise ExportError("rasterised preview is empty")

        slice_px = width * PAGE_HEIGHT_MM / PAGE_WIDTH_MM
        page_w, page_h = A4
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=A4)
        for n in range(page_count(width, height)):
            top = round(n * slice_px)
            bottom = min(height, round((n + 1) * slice_px))
            if bottom <= top:
                break
            part = img.crop((0, top, width, bottom))
            draw_h = page_w * (bottom - top) / width
            pdf.drawImage(ImageReader(part), 0, page_h - draw_h, width=page_w, height=draw_h)
            pdf.showPage()
        pdf.save()
    return buf.getvalue()


def export_pdf(
    record: ResumeRecord, html: str, rasterize: Optional[Rasterizer] = None
) -> ExportResult:
    """Rasterise the displayed template and paginate it onto A4 pages."""
    rasterize = rasterize or rasterize_html
    try:
        png = rasterize(html)
        data = paginate_png(png)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"PDF generation failed: {e}") from e
    return ExportResult(
        filename=export_filename(record.full_name, ExportKind.PDF),
        data=data,
        mime=MIME_TYPES[ExportKind.PDF],
    )
