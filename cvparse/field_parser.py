"""
Heuristic CV field parsing.

Turns extracted document text into a CvRecord:
- the text is split into trimmed lines (blank lines kept)
- name, email and phone are the first lines matching their patterns
- experience and skills are collected by a keyword-triggered section
  scanner that runs from the trigger line to the next blank line

Every detector is a plain function over the line list so it can be
used and tested on its own.
"""

from __future__ import annotations

import re
import traceback
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .logging_utils import LOG
from .shared import (
    NOT_FOUND,
    CvRecord,
    ParseFailure,
    ParseResult,
    split_lines,
)
from .text_extractors import DocumentTextExtractor, TextExtractor

# ------------------------- Patterns -------------------------

NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")

EMAIL_PATTERN = re.compile(
    r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b",
    re.IGNORECASE | re.ASCII,
)

# ASCII digits only. Loose on purpose: also matches years, date ranges and postal codes
PHONE_PATTERN = re.compile(
    r"\+?\d{1,4}?[-.\s]?\(?\d{1,4}?\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}",
    re.ASCII,
)

EXPERIENCE_KEYWORD = "experience"
SKILLS_KEYWORD = "skills"

DEFAULT_SECTION_HEADINGS: Dict[str, Tuple[str, ...]] = {
    EXPERIENCE_KEYWORD: ("experience", "work experience", "professional experience"),
    SKILLS_KEYWORD: ("skills", "technical skills"),
}

_HEADING_STRIP = " \t:.-"


@dataclass(frozen=True)
class ParserOptions:
    """
    Tuning knobs for section scanning.

    strict_sections: only lines that are a heading (keyword or one of its
    aliases, ignoring case and trailing punctuation) open a section, and
    the heading of another section closes it.
    """
    strict_sections: bool = False
    experience_keyword: str = EXPERIENCE_KEYWORD
    skills_keyword: str = SKILLS_KEYWORD
    section_headings: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_HEADINGS)
    )

    def headings_for(self, keyword: str) -> Tuple[str, ...]:
        aliases = self.section_headings.get(keyword, ())
        return (keyword.lower(),) + tuple(a.lower() for a in aliases if a.lower() != keyword.lower())

# ------------------------- Single-line detectors -------------------------


def _first_line(lines: Iterable[str], matches: Callable[[str], object]) -> str:
    for line in lines:
        if matches(line):
            return line
    return NOT_FOUND


def detect_name(lines: Iterable[str]) -> str:
    """First line made of letters and whitespace only."""
    return _first_line(lines, NAME_PATTERN.fullmatch)


def detect_email(lines: Iterable[str]) -> str:
    """First line containing an email address (the whole line is returned)."""
    return _first_line(lines, EMAIL_PATTERN.search)


def detect_phone(lines: Iterable[str]) -> str:
    """First line containing something shaped like a phone number."""
    return _first_line(lines, PHONE_PATTERN.search)

# ------------------------- Section scanning -------------------------


def _normalize_heading(line: str) -> str:
    return line.lower().strip(_HEADING_STRIP)


class SectionScanner:
    """
    Collects the lines of one keyword-labelled section.

    Two states: outside and inside. A trigger line moves outside -> inside
    and is not collected; a blank line moves inside -> outside; any other
    line seen inside is collected verbatim. The scan keeps going after a
    section closes, so a later trigger line opens it again.
    """

    def __init__(
        self,
        keyword: str,
        *,
        strict: bool = False,
        headings: Iterable[str] = (),
        stop_headings: Iterable[str] = (),
    ):
        self.keyword = keyword.lower()
        self.strict = strict
        self.headings = frozenset(h.lower() for h in headings) | {self.keyword}
        self.stop_headings = frozenset(h.lower() for h in stop_headings) - self.headings

    def is_trigger(self, line: str) -> bool:
        if self.strict:
            return _normalize_heading(line) in self.headings
        return self.keyword in line.lower()

    def is_stop(self, line: str) -> bool:
        if line == "":
            return True
        return self.strict and _normalize_heading(line) in self.stop_headings

    def scan(self, lines: Iterable[str]) -> List[str]:
        collected: List[str] = []
        inside = False
        for line in lines:
            if not inside and self.is_trigger(line):
                inside = True
            elif inside and self.is_stop(line):
                inside = False
            elif inside:
                collected.append(line)
        return collected


def scan_section(
    lines: Iterable[str],
    keyword: str,
    *,
    strict: bool = False,
    headings: Iterable[str] = (),
    stop_headings: Iterable[str] = (),
) -> str:
    """Scan one section and join its lines with single spaces ("" if never triggered)."""
    scanner = SectionScanner(keyword, strict=strict, headings=headings, stop_headings=stop_headings)
    return " ".join(scanner.scan(lines))


def scan_sections(lines: List[str], options: Optional[ParserOptions] = None) -> Dict[str, str]:
    """
    Run one independent scan per configured keyword over the same lines.

    A line containing several keywords opens all of their sections.
    """
    options = options or ParserOptions()
    keywords = [options.experience_keyword, options.skills_keyword]
    all_headings = {kw: options.headings_for(kw) for kw in keywords}

    out: Dict[str, str] = {}
    for kw in keywords:
        others = [h for other, hs in all_headings.items() if other != kw for h in hs]
        out[kw] = scan_section(
            lines,
            kw,
            strict=options.strict_sections,
            headings=all_headings[kw],
            stop_headings=others,
        )
    return out

# ------------------------- Assembly -------------------------


def parse_lines(lines: List[str], options: Optional[ParserOptions] = None) -> CvRecord:
    options = options or ParserOptions()
    sections = scan_sections(lines, options)
    return CvRecord(
        name=detect_name(lines),
        email=detect_email(lines),
        phone=detect_phone(lines),
        experience=sections[options.experience_keyword],
        skills=sections[options.skills_keyword],
    )


def parse_text(text: str, options: Optional[ParserOptions] = None) -> CvRecord:
    """Parse already extracted text; pure and deterministic."""
    return parse_lines(split_lines(text), options)


class CvFieldParser:
    """
    Parses a document reference into a CvRecord.

    Text extraction is delegated to a TextExtractor (DocumentTextExtractor
    by default). Any failure, in extraction or parsing, is logged and
    turned into a ParseFailure carrying the generic user-facing message.
    """

    def __init__(
        self,
        text_extractor: Optional[TextExtractor] = None,
        options: Optional[ParserOptions] = None,
    ):
        self.text_extractor = text_extractor or DocumentTextExtractor()
        self.options = options or ParserOptions()

    def parse(self, reference: str) -> ParseResult:
        try:
            text = self.text_extractor.extract_text(reference)
            LOG.debug("Extracted text from %s:\n%s", reference, text)
            record = parse_text(text, self.options)
        except Exception as e:
            LOG.error("Error parsing CV %s: %s", reference, e)
            LOG.debug(traceback.format_exc())
            return ParseFailure()

        LOG.debug("Parsed %s: %s", reference, record.as_dict())
        return record
