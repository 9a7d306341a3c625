import io

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a .docx with two paragraphs and a two-column table."""
    document = docx.Document()
    document.add_paragraph("Annual leave is 15 days per year.")
    document.add_paragraph("Working hours are 45 per week.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Notice period"
    table.rows[0].cells[1].text = "1 week"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    """Generate a valid .docx that holds no text."""
    buf = io.BytesIO()
    docx.Document().save(buf)
    return buf.getvalue()


@pytest.fixture()
def valid_report_payload() -> dict[str, object]:
    return {
        "score": 64,
        "summary": "The policy falls short on annual leave.",
        "red_flags": [
            {
                "issue": "Annual leave is 15 days.",
                "law": "BCEA Section 20",
                "impact": "High",
                "correction": "Grant 21 consecutive days.",
            }
        ],
        "positive_findings": [
            {
                "finding": "Hours are capped at 45.",
                "law": "BCEA Section 9",
                "benefit": "Matches the statutory maximum.",
            }
        ],
        "disclaimer": "Not legal advice.",
    }
