"""
CLI configuration data structures.

Defines UserConfig, the result of the gather phase consumed by execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .logging_utils import VERBOSITY_QUIET
from .text_extractors.document_loader import default_http_timeout


@dataclass
class UserConfig:
    """Configuration gathered from user input."""

    # Files, directories or URLs to parse
    sources: List[str] = field(default_factory=list)

    # Where per-file JSON results go (stdout when None)
    target_dir: Optional[Path] = None

    # Execution settings
    parallel: int = 1
    strict_sections: bool = False
    timeout: float = field(default_factory=default_http_timeout)
    verbosity: int = VERBOSITY_QUIET
    debug: bool = False
    log_file: Optional[str] = None
