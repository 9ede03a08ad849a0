"""
Uploaded file ➜ raw text
– PDFs go through pdfplumber, `(cid:N)` glyph artifacts stripped
– text/* uploads are decoded as UTF-8
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
import io, re, logging, warnings, pdfplumber

from .errors import ExtractionError

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

_CID_RE = re.compile(r"\(cid:\d+\)")

PDF_MIME = "application/pdf"


def pdf_to_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        pages = [p.extract_text() or "" for p in pdf.pages]
    return _CID_RE.sub("", "\n".join(pages))


def file_to_text(data: bytes, mime_type: str) -> str:
    """Turn an uploaded document into text the model can read."""
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime == PDF_MIME:
        return pdf_to_text(data)
    if mime.startswith("text/"):
        return data.decode("utf-8", errors="replace")
    raise ExtractionError(f"unsupported document type: {mime_type!r}")
