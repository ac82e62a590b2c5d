"""Configuration objects and constants for the spider."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_OUTPUT_DIR = "DownloadedResources"
DEFAULT_TIMEOUT = 30.0

WELL_KNOWN_FILES: Tuple[str, ...] = (
    "robots.txt",
    "sitemap.xml",
    "site.webmanifest",
    "favicon.ico",
)


@dataclass
class SpiderConfig:
    """Top-level settings that control a single spidering pass."""

    output_root: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    timeout: Optional[float] = DEFAULT_TIMEOUT
    well_known_files: Tuple[str, ...] = WELL_KNOWN_FILES
