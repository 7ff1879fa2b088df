"""
Default text extractor: load a reference, then decode it by format.
"""

from __future__ import annotations

from typing import Optional

from ..logging_utils import LOG
from ..shared import RawDocument
from .base import ExtractionError, TextExtractor
from .document_loader import load_document
from .extractor_registry import get_text_extractor


class DocumentTextExtractor(TextExtractor):
    """
    Resolves local paths and http(s) URLs and decodes them with the
    decoder registered for the document's format.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def extract_text(self, reference: str) -> str:
        document = load_document(reference, timeout=self.timeout)
        return self.decode(document)

    def decode(self, document: RawDocument) -> str:
        decoder = get_text_extractor(document.suffix) if document.suffix else None
        if decoder is None:
            raise ExtractionError(
                f"Unsupported document format: {document.suffix or 'unknown'} ({document.origin})"
            )
        text = decoder.decode(document)
        LOG.debug("Extracted %d characters from %s", len(text), document.origin)
        return text
