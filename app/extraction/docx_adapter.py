import io

import docx
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from app.extraction.base import BaseExtractor
from app.extraction.exceptions import UnsupportedFormatError
from app.extraction.models import ExtractionResult
from app.processor.models import MediaType, UploadedDocument

_PARAGRAPH = qn("w:p")
_TABLE = qn("w:tbl")


class DocxAdapter(BaseExtractor):
    """Extracts paragraph and table text from Office Open XML documents.

    Blocks are read in body order, so a clause table stays next to the
    paragraphs that introduce it. Table rows become ``cell | cell`` lines.
    """

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            parsed = docx.Document(io.BytesIO(document.content))
        except Exception as exc:
            # Legacy binary .doc files land here too: they are not zip archives.
            raise UnsupportedFormatError(
                f"'{document.file_name}' is not a readable .docx document: {exc}"
            ) from exc

        blocks: list[str] = []
        for child in parsed.element.body.iterchildren():
            if child.tag == _PARAGRAPH:
                text = Paragraph(child, parsed).text
                if text.strip():
                    blocks.append(text)
            elif child.tag == _TABLE:
                blocks.extend(_table_rows(Table(child, parsed)))

        text = "\n".join(blocks).strip()
        if not text:
            raise UnsupportedFormatError(f"'{document.file_name}' contains no text")
        return ExtractionResult(text=text, source_format=MediaType.WORD)


def _table_rows(table: Table) -> list[str]:
    rows = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
        if cells:
            rows.append(" | ".join(cells))
    return rows
