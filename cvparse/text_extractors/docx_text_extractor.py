"""
Word (.docx) decoder.

Reads the WordprocessingML parts straight from the zip container:
- header parts (word/header*.xml), where templates often put the name
- the main body (word/document.xml), one line per paragraph

Empty body paragraphs are kept as empty lines; they separate sections.
"""

from __future__ import annotations

from io import BytesIO
from typing import Iterator, List
from zipfile import BadZipFile, ZipFile

from lxml import etree

from ..logging_utils import LOG
from ..shared import RawDocument, normalize_text_for_processing
from .base import ExtractionError, FormatTextExtractor

XML_PARSER = etree.XMLParser(recover=True, huge_tree=True)

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
DOCX_NS = {"w": W_NS}

DOCUMENT_PART = "word/document.xml"

# Subtrees that belong to another paragraph (text boxes) or duplicate
# content already present in mc:Choice
_FOREIGN_SUBTREES = ("p", "Fallback")


def _localname(node: etree._Element) -> str:
    if not isinstance(node.tag, str):
        return ""  # comments, processing instructions
    return etree.QName(node).localname


def _iter_own_nodes(p: etree._Element) -> Iterator[etree._Element]:
    """Descendants of p in document order, skipping nested paragraphs and fallbacks."""
    for child in p:
        if _localname(child) in _FOREIGN_SUBTREES:
            continue
        yield child
        yield from _iter_own_nodes(child)


def iter_paragraph_elements(root: etree._Element) -> Iterator[etree._Element]:
    """Every w:p in document order, except the mc:Fallback copies."""
    for p in root.iter(f"{{{W_NS}}}p"):
        if any(_localname(a) == "Fallback" for a in p.iterancestors()):
            continue
        yield p


def extract_text_from_w_p(p: etree._Element) -> str:
    parts: List[str] = []
    for node in _iter_own_nodes(p):
        tag = _localname(node)
        if tag == "t" and node.text:
            parts.append(node.text)
        elif tag in ("noBreakHyphen", "softHyphen"):
            parts.append("-")
        elif tag in ("br", "cr"):
            parts.append("\n")
        elif tag == "tab":
            parts.append("\t")
    return normalize_text_for_processing("".join(parts)).strip()


def iter_body_paragraphs(z: ZipFile) -> Iterator[str]:
    """Yield the text of every body paragraph, empty ones included."""
    root = etree.fromstring(z.read(DOCUMENT_PART), XML_PARSER)
    if root is None:
        raise ExtractionError(f"{DOCUMENT_PART} is empty or not XML")
    body = root.find("w:body", DOCX_NS)
    if body is None:
        return
    for p in iter_paragraph_elements(body):
        yield extract_text_from_w_p(p)


def header_paragraphs(z: ZipFile) -> List[str]:
    """
    Collect non-empty paragraphs from all header parts,
    de-duplicated while preserving order.
    """
    paragraphs: List[str] = []
    for name in sorted(z.namelist()):
        if name.startswith("word/header") and name.endswith(".xml"):
            root = etree.fromstring(z.read(name), XML_PARSER)
            if root is None:
                continue
            for p in iter_paragraph_elements(root):
                text = extract_text_from_w_p(p)
                if text:
                    paragraphs.append(text)

    out: List[str] = []
    seen = set()
    for p in paragraphs:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return out


class DocxTextExtractor(FormatTextExtractor):
    """Microsoft Word .docx documents (headers and body)."""

    def decode(self, document: RawDocument) -> str:
        try:
            with ZipFile(BytesIO(document.payload)) as z:
                if DOCUMENT_PART not in z.namelist():
                    raise ExtractionError(f"{document.origin} has no {DOCUMENT_PART}")
                header = header_paragraphs(z)
                body = list(iter_body_paragraphs(z))
        except BadZipFile as e:
            raise ExtractionError(f"{document.origin} is not a valid .docx file") from e
        except etree.XMLSyntaxError as e:
            raise ExtractionError(f"{document.origin} contains malformed XML: {e}") from e

        LOG.debug("%s: %d header / %d body paragraphs", document.origin, len(header), len(body))
        lines = header + [""] + body if header else body
        return "\n".join(lines)
