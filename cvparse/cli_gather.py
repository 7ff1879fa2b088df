"""
CLI Phase 1: Gather user requirements.

Parses command-line arguments and returns UserConfig dataclass.
No side effects except for --list, which prints and exits.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .cli_config import UserConfig
from .logging_utils import VERBOSITY_NORMAL, VERBOSITY_QUIET, VERBOSITY_VERBOSE
from .text_extractors import list_text_extractors
from .text_extractors.document_loader import default_http_timeout


def _handle_list_command(list_type: str) -> None:
    """Print the registered components of the given type."""
    if list_type == "extractors":
        print("\nAvailable Extractors:")
        print("=" * 60)
        for extractor in list_text_extractors():
            print(f"  {extractor['name']:<12} {extractor['description']}")
        print()


def gather_user_requirements(argv: Optional[List[str]] = None) -> UserConfig:
    """
    Phase 1: Parse command-line arguments and return user configuration.

    Raises:
        ValueError: If the arguments are inconsistent
    """
    parser = argparse.ArgumentParser(
        description="Extract name, contact details, experience and skills from CV documents.",
        epilog="""
Examples:
  Parse a single CV and print the result:
    python -m cvparse.cli cv.pdf

  Parse a folder of CVs with four workers, one JSON file per CV:
    python -m cvparse.cli cvs/ --parallel 4 --target output/

  Parse a remote CV:
    python -m cvparse.cli https://example.com/uploads/cv.docx
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("sources", nargs="*", metavar="SOURCE",
                        help="CV file, folder of CVs, or http(s) URL")
    parser.add_argument("--target",
                        help="Output directory for per-file JSON results (default: stdout)")
    parser.add_argument("--parallel", type=int, default=1, metavar="N",
                        help="Number of CVs parsed concurrently (default: 1)")
    parser.add_argument("--strict-sections", action="store_true",
                        help="Only exact headings open a section; another heading closes it.")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Download timeout in seconds for URLs "
                             "(default: $CVPARSE_HTTP_TIMEOUT or 15)")
    parser.add_argument("--verbosity", type=int, choices=[VERBOSITY_QUIET, VERBOSITY_NORMAL, VERBOSITY_VERBOSE],
                        default=VERBOSITY_QUIET,
                        help="0=warnings only, 1=per-file progress, 2=debug")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logs + stack traces on failure.")
    parser.add_argument("--log-file",
                        help="Optional path to a log file. If set, all output is also written there.")
    parser.add_argument("--list", choices=["extractors"],
                        help="List available components and exit.")

    args = parser.parse_args(argv)

    if args.list:
        _handle_list_command(args.list)
        sys.exit(0)

    if not args.sources:
        raise ValueError("At least one SOURCE is required")

    if args.parallel < 1:
        raise ValueError("--parallel must be at least 1")

    timeout = args.timeout if args.timeout is not None else default_http_timeout()
    if timeout <= 0:
        raise ValueError("--timeout must be positive")

    return UserConfig(
        sources=list(args.sources),
        target_dir=Path(args.target) if args.target else None,
        parallel=args.parallel,
        strict_sections=args.strict_sections,
        timeout=timeout,
        verbosity=args.verbosity,
        debug=args.debug,
        log_file=args.log_file,
    )
