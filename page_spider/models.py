"""Data models used throughout the spider pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class ResourceKind(str, enum.Enum):
    """Element/attribute pair a resource reference was discovered through."""

    IMAGE_SRC = "image-src"
    LINK_HREF = "link-href"
    SCRIPT_SRC = "script-src"
    ANCHOR_HREF = "anchor-href"


@dataclass(frozen=True)
class ResourceReference:
    """Same-origin absolute URL discovered in an HTML attribute."""

    url: str
    kind: ResourceKind


@dataclass(frozen=True)
class ApiCallReference:
    """Absolute URL discovered through the ``fetchTextDataAsync`` call pattern."""

    url: str


@dataclass
class ItemOutcome:
    """Result of fetching and persisting a single item."""

    url: str
    local_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.local_path is not None


@dataclass
class SpiderResult:
    """Structured report for one spidering pass."""

    page_url: str
    output_root: Path
    page_error: Optional[str] = None
    api_calls: List[ItemOutcome] = field(default_factory=list)
    resources: List[ItemOutcome] = field(default_factory=list)
    well_known: List[ItemOutcome] = field(default_factory=list)

    @property
    def page_fetched(self) -> bool:
        return self.page_error is None

    def _items(self) -> List[ItemOutcome]:
        return [*self.api_calls, *self.resources, *self.well_known]

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self._items() if item.ok)

    @property
    def failed(self) -> int:
        return sum(1 for item in self._items() if not item.ok)

    @property
    def has_item_failures(self) -> bool:
        """Whether any API call or resource failed; well-known files are best-effort."""
        return any(not item.ok for item in [*self.api_calls, *self.resources])
