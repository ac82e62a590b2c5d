"""HTML resource extraction and API-call scanning."""

from __future__ import annotations

import re
from typing import Dict, List, Union

from bs4 import BeautifulSoup

from .models import ApiCallReference, ResourceKind, ResourceReference
from .urls import normalize_url, resolve_url

# Tag name -> (attribute holding the URL, reference kind).
RESOURCE_ATTRIBUTES: Dict[str, tuple] = {
    "img": ("src", ResourceKind.IMAGE_SRC),
    "link": ("href", ResourceKind.LINK_HREF),
    "script": ("src", ResourceKind.SCRIPT_SRC),
    "a": ("href", ResourceKind.ANCHOR_HREF),
}

# Textual heuristic, not a JavaScript parse: the literal call prefix, a
# backtick-quoted argument with no backticks inside, then a comma.
API_CALL_PATTERN = re.compile(r"self\.fetchTextDataAsync\(\s*`([^`]*)`,")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_resources(
    document: Union[BeautifulSoup, str],
    base_url: str,
) -> List[ResourceReference]:
    """Return same-origin resource references in document order, de-duplicated."""
    soup = parse_html(document) if isinstance(document, str) else document
    seen = set()
    references: List[ResourceReference] = []
    for tag in soup.find_all(list(RESOURCE_ATTRIBUTES)):
        attribute, kind = RESOURCE_ATTRIBUTES[tag.name]
        value = tag.get(attribute)
        absolute_url = normalize_url(value, base_url)
        if absolute_url is None or absolute_url in seen:
            continue
        seen.add(absolute_url)
        references.append(ResourceReference(absolute_url, kind))
    return references


def extract_api_calls(html: str, base_url: str) -> List[ApiCallReference]:
    """Scan raw page text for ``self.fetchTextDataAsync(`...`,`` calls.

    Matches anywhere in the text (inline scripts, attributes, comments).
    Results keep their order and duplicates, and are not filtered by origin.
    """
    calls: List[ApiCallReference] = []
    for match in API_CALL_PATTERN.finditer(html):
        target = match.group(1)
        if not target.strip():
            # An empty argument resolves to the page itself.
            calls.append(ApiCallReference(base_url))
            continue
        absolute_url = resolve_url(target, base_url)
        if absolute_url is not None:
            calls.append(ApiCallReference(absolute_url))
    return calls
