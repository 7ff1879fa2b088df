"""
Load document references into RawDocument payloads.

References are either local paths or http(s) URLs; remote documents
are downloaded with requests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from ..logging_utils import LOG
from ..shared import SUPPORTED_FORMATS, RawDocument
from .base import ExtractionError
from .extractor_registry import is_registered_format

DEFAULT_HTTP_TIMEOUT = 15.0

_CONTENT_TYPE_SUFFIXES = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/rtf": "rtf",
    "text/rtf": "rtf",
    "text/plain": "txt",
}


def default_http_timeout() -> float:
    raw = os.environ.get("CVPARSE_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        LOG.warning("Ignoring invalid CVPARSE_HTTP_TIMEOUT=%r", raw)
        return DEFAULT_HTTP_TIMEOUT


def is_remote_reference(reference: str) -> bool:
    return urlparse(reference).scheme in ("http", "https")


def _suffix_of(name: str) -> str:
    return Path(name).suffix.lower().lstrip(".")


def _suffix_from_content_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    mime = content_type.split(";", 1)[0].strip().lower()
    return _CONTENT_TYPE_SUFFIXES.get(mime, "")


def _is_known_format(suffix: str) -> bool:
    return bool(suffix) and (suffix in SUPPORTED_FORMATS or is_registered_format(suffix))


def fetch_remote_document(url: str, timeout: Optional[float] = None) -> RawDocument:
    """Download a document; any transport problem or non-200 status is an ExtractionError."""
    if timeout is None:
        timeout = default_http_timeout()
    LOG.debug("Fetching %s (timeout=%ss)", url, timeout)
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ExtractionError(f"Could not fetch {url}: {e}") from e
    if resp.status_code != 200:
        raise ExtractionError(f"Could not fetch {url}: HTTP {resp.status_code}")

    # Dotted path segments ("download.php", "jane.doe") are not formats
    suffix = _suffix_of(urlparse(url).path)
    if not _is_known_format(suffix):
        suffix = _suffix_from_content_type(resp.headers.get("Content-Type"))
    return RawDocument(payload=resp.content, suffix=suffix, origin=url)


def read_local_document(reference: str) -> RawDocument:
    path = Path(reference).expanduser()
    if not path.exists():
        raise ExtractionError(f"Document not found: {path}")
    if not path.is_file():
        raise ExtractionError(f"Path must be a file: {path}")
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise ExtractionError(f"Could not read {path}: {e}") from e
    return RawDocument(payload=payload, suffix=_suffix_of(path.name), origin=str(path))


def load_document(reference: str, timeout: Optional[float] = None) -> RawDocument:
    """
    Load a document reference.

    Args:
        reference: Local path or http(s) URL
        timeout: Download timeout in seconds for remote references

    Raises:
        ExtractionError: If the document cannot be loaded
    """
    if is_remote_reference(reference):
        return fetch_remote_document(reference, timeout=timeout)
    return read_local_document(reference)
