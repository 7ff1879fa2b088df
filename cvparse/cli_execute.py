"""
CLI Phase 2: Execute.

Expands the configured sources into individual documents, parses them
(optionally on a thread pool) and emits one JSON envelope per document.
"""

from __future__ import annotations

import json
import sys
import traceback
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional

from .cli_config import UserConfig
from .field_parser import CvFieldParser, ParserOptions
from .logging_utils import LOG, fmt_issues
from .shared import SUPPORTED_FORMATS, CvRecord, ParseResult, write_output_json
from .text_extractors import DocumentTextExtractor
from .text_extractors.document_loader import is_remote_reference

SUCCESS_MESSAGE = "CV parsed successfully"
FAILURE_MESSAGE = "CV parsing failed"


def scan_directory_for_documents(directory: Path) -> List[Path]:
    """
    Recursively scan directory for CV documents of a supported format.

    Temporary Word files (~$...) are skipped.
    """
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ValueError(f"Path is not a directory: {directory}")

    found = []
    for path in directory.rglob("*"):
        if not path.is_file() or path.name.startswith("~$"):
            continue
        if path.suffix.lower().lstrip(".") in SUPPORTED_FORMATS:
            found.append(path)
    return sorted(found)


def collect_inputs(sources: List[str]) -> List[str]:
    """Expand directories; URLs and files are passed through unchanged."""
    inputs: List[str] = []
    for source in sources:
        if not is_remote_reference(source) and Path(source).is_dir():
            inputs.extend(str(p) for p in scan_directory_for_documents(Path(source)))
        else:
            inputs.append(source)
    return inputs


def build_envelope(source: str, result: ParseResult) -> Dict[str, Any]:
    ok = isinstance(result, CvRecord)
    return {
        "message": SUCCESS_MESSAGE if ok else FAILURE_MESSAGE,
        "source": source,
        "parsedData": result.as_dict(),
    }


def output_path_for(source: str, target_dir: Path) -> Path:
    stem = Path(source.split("?", 1)[0].rstrip("/")).stem or "cv"
    return target_dir / f"{stem}.json"


def emit_result(source: str, result: ParseResult, target_dir: Optional[Path]) -> None:
    envelope = build_envelope(source, result)
    if target_dir is None:
        sys.stdout.write(json.dumps(envelope, ensure_ascii=False, indent=2) + "\n")
        return
    path = write_output_json(output_path_for(source, target_dir), envelope)
    LOG.info("Wrote %s", path)


def _parse_all(parser: CvFieldParser, inputs: List[str], workers: int) -> Dict[str, ParseResult]:
    if workers <= 1 or len(inputs) <= 1:
        return {source: parser.parse(source) for source in inputs}

    LOG.info("Processing %d files with %d parallel workers", len(inputs), workers)
    results: Dict[str, ParseResult] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_source = {executor.submit(parser.parse, source): source for source in inputs}
        for future in as_completed(future_to_source):
            results[future_to_source[future]] = future.result()
    return results


def execute(config: UserConfig) -> int:
    """
    Parse every configured source.

    Returns:
        Exit code (0 = all parsed, 1 = one or more failed or nothing to parse)
    """
    try:
        inputs = collect_inputs(config.sources)
    except (FileNotFoundError, ValueError) as e:
        LOG.error("Failed to collect inputs: %s", e)
        if config.debug:
            LOG.error(traceback.format_exc())
        return 1

    if not inputs:
        LOG.error("No CV documents found in: %s", ", ".join(config.sources))
        return 1

    parser = CvFieldParser(
        text_extractor=DocumentTextExtractor(timeout=config.timeout),
        options=ParserOptions(strict_sections=config.strict_sections),
    )
    results = _parse_all(parser, inputs, config.parallel)

    failed: List[str] = []
    for source in inputs:
        result = results[source]
        emit_result(source, result, config.target_dir)
        if isinstance(result, CvRecord):
            LOG.info("✓ %s", source)
        else:
            LOG.warning("✗ %s | %s", source, fmt_issues([result.message], []))
            failed.append(source)

    if len(inputs) > 1:
        LOG.info("=" * 60)
        LOG.info("Completed: %d/%d files succeeded, %d failed",
                 len(inputs) - len(failed), len(inputs), len(failed))

    return 1 if failed else 0
