# cvparse/__init__.py

from .shared import (
    NOT_FOUND,
    PARSE_FAILURE_MESSAGE,
    CvRecord,
    ParseFailure,
    RawDocument,
    split_lines,
)
from .text_extractors import DocumentTextExtractor, ExtractionError, TextExtractor
from .field_parser import (
    CvFieldParser,
    ParserOptions,
    SectionScanner,
    detect_email,
    detect_name,
    detect_phone,
    parse_text,
    scan_section,
)

__all__ = [
    "NOT_FOUND",
    "PARSE_FAILURE_MESSAGE",
    "CvRecord",
    "ParseFailure",
    "RawDocument",
    "split_lines",
    "DocumentTextExtractor",
    "ExtractionError",
    "TextExtractor",
    "CvFieldParser",
    "ParserOptions",
    "SectionScanner",
    "detect_email",
    "detect_name",
    "detect_phone",
    "parse_text",
    "scan_section",
]
