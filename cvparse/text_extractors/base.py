"""
Base interfaces for text extractors.

Defines the contract between document decoding and field parsing:
a text extractor turns a document into plain text or raises ExtractionError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..shared import RawDocument


class ExtractionError(Exception):
    """The document could not be fetched, read or decoded."""


class TextExtractor(ABC):
    """
    Abstract base class for reference-level text extractors.

    Implementations resolve a document reference (a path or a URL)
    and return its decoded text.
    """

    @abstractmethod
    def extract_text(self, reference: str) -> str:
        """
        Extract the text of the referenced document.

        Args:
            reference: Local path or http(s) URL of the document

        Returns:
            The decoded text, lines separated by "\\n"

        Raises:
            ExtractionError: If the document is unreachable, unreadable
                or in an unsupported format
        """
        ...


class FormatTextExtractor(ABC):
    """
    Abstract base class for single-format decoders.

    Implementations receive the already loaded document bytes and
    are registered per format in the extractor registry.
    """

    @abstractmethod
    def decode(self, document: RawDocument) -> str:
        """
        Decode the document payload into text.

        Raises:
            ExtractionError: If the payload is not a valid document of this format
        """
        ...
