"""
Shared models and text utilities.

Defines the data structures passed between text extraction and field
parsing (raw documents, parsed records, failures) together with the
text normalization and JSON output helpers used across the package.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

# ------------------------- Constants -------------------------

NOT_FOUND = "Not found"
PARSE_FAILURE_MESSAGE = "Failed to parse CV. Please upload a valid file."

# Formats accepted by the upload layer
SUPPORTED_FORMATS = ("pdf", "doc", "docx", "rtf", "txt")

# ------------------------- Models -------------------------


@dataclass(frozen=True)
class RawDocument:
    """
    Document payload as loaded from a local path or a URL.

    suffix is the lowercase format hint without the dot ("pdf", "docx", ...),
    empty when neither the reference nor the response revealed one.
    """
    payload: bytes
    suffix: str
    origin: str


@dataclass(frozen=True)
class CvRecord:
    name: str = NOT_FOUND
    email: str = NOT_FOUND
    phone: str = NOT_FOUND
    experience: str = ""
    skills: str = ""

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class ParseFailure:
    message: str = PARSE_FAILURE_MESSAGE

    def as_dict(self) -> Dict[str, str]:
        return {"error": self.message}


ParseResult = Union[CvRecord, ParseFailure]

# ------------------------- Text helpers -------------------------


def normalize_text_for_processing(s: str) -> str:
    """
    Normalize what we consider "text":
    - convert NBSP to normal space
    - normalize newlines
    """
    s = s.replace("\u00A0", " ")
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    return s


def split_lines(text: str) -> List[str]:
    """
    Split extracted text into trimmed lines.

    Order is kept and blank lines stay in place: they close sections.
    """
    return [line.strip() for line in text.split("\n")]

# ------------------------- Output -------------------------


def write_output_json(path: Path, data: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path
