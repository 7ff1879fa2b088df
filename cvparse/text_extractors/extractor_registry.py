"""
Extractor registry mapping document formats to decoders.

Formats are identified by their lowercase suffix ("pdf", "docx", ...).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Type

from .base import FormatTextExtractor


# Global extractor registry
_EXTRACTOR_REGISTRY: Dict[str, Type[FormatTextExtractor]] = {}


def register_text_extractor(fmt: str, extractor_class: Type[FormatTextExtractor]) -> None:
    """
    Register a decoder class for a document format.

    Args:
        fmt: Format suffix without the dot (e.g., "docx")
        extractor_class: The decoder class to register
    """
    _EXTRACTOR_REGISTRY[fmt.lower().lstrip(".")] = extractor_class


def get_text_extractor(fmt: str) -> Optional[FormatTextExtractor]:
    """
    Get a decoder instance for a format.

    Returns:
        Decoder instance, or None if the format is not registered
    """
    extractor_class = _EXTRACTOR_REGISTRY.get(fmt.lower().lstrip("."))
    if extractor_class:
        return extractor_class()
    return None


def is_registered_format(fmt: str) -> bool:
    return fmt.lower().lstrip(".") in _EXTRACTOR_REGISTRY


def list_text_extractors() -> List[Dict[str, str]]:
    """
    List all registered decoders with their descriptions.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    extractors = []
    for name, extractor_class in _EXTRACTOR_REGISTRY.items():
        description = extractor_class.__doc__ or "No description available"
        description = description.strip().split('\n')[0]
        extractors.append({
            'name': name,
            'description': description
        })
    return sorted(extractors, key=lambda x: x['name'])


def unregister_text_extractor(fmt: str) -> None:
    _EXTRACTOR_REGISTRY.pop(fmt.lower().lstrip("."), None)


__all__ = [
    "register_text_extractor",
    "get_text_extractor",
    "is_registered_format",
    "list_text_extractors",
    "unregister_text_extractor",
]
