"""Plain text (.txt) decoder."""

from __future__ import annotations

from ..shared import RawDocument, normalize_text_for_processing
from .base import ExtractionError, FormatTextExtractor


class PlainTextExtractor(FormatTextExtractor):
    """Plain UTF-8 text files."""

    def decode(self, document: RawDocument) -> str:
        try:
            text = document.payload.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"{document.origin} is not valid UTF-8 text") from e
        return normalize_text_for_processing(text)
