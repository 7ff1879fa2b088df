"""
Text extraction interfaces and implementations.

Decoders are registered per document format; DocumentTextExtractor
dispatches a reference to the matching decoder.
"""

from .base import ExtractionError, FormatTextExtractor, TextExtractor
from .docx_text_extractor import DocxTextExtractor
from .pdf_text_extractor import PdfTextExtractor
from .plain_text_extractor import PlainTextExtractor
from .document_loader import load_document
from .document_text_extractor import DocumentTextExtractor
from .extractor_registry import (
    get_text_extractor,
    is_registered_format,
    list_text_extractors,
    register_text_extractor,
    unregister_text_extractor,
)

register_text_extractor("txt", PlainTextExtractor)
register_text_extractor("docx", DocxTextExtractor)
register_text_extractor("pdf", PdfTextExtractor)

__all__ = [
    "ExtractionError",
    "FormatTextExtractor",
    "TextExtractor",
    "DocxTextExtractor",
    "PdfTextExtractor",
    "PlainTextExtractor",
    "DocumentTextExtractor",
    "load_document",
    "get_text_extractor",
    "is_registered_format",
    "list_text_extractors",
    "register_text_extractor",
    "unregister_text_extractor",
]
