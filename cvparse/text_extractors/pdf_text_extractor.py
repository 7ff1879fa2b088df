"""PDF decoder backed by pdfplumber."""

from __future__ import annotations

from io import BytesIO
from typing import List

import pdfplumber

from ..logging_utils import LOG
from ..shared import RawDocument, normalize_text_for_processing
from .base import ExtractionError, FormatTextExtractor


class PdfTextExtractor(FormatTextExtractor):
    """PDF documents, page text in reading order."""

    def decode(self, document: RawDocument) -> str:
        pages: List[str] = []
        try:
            with pdfplumber.open(BytesIO(document.payload)) as pdf:
                for page in pdf.pages:
                    pages.append(page.extract_text() or "")
        except Exception as e:
            # pdfminer raises a zoo of exception types for broken files
            raise ExtractionError(f"{document.origin} is not a readable PDF: {e}") from e

        LOG.debug("%s: %d pages", document.origin, len(pages))
        return normalize_text_for_processing("\n".join(pages))
