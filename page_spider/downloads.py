"""Per-item fetching and persistence for API calls, resources and site files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urljoin

import requests

from .models import ApiCallReference, ItemOutcome, ResourceReference
from .paths import api_response_path, local_path_for
from .urls import origin_root

logger = logging.getLogger("page_spider")


def fetch_bytes(
    session: requests.Session,
    url: str,
    timeout: Optional[float],
) -> bytes:
    """GET ``url`` and return the raw body; raises on transport or HTTP errors."""
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.content


def call_apis(
    session: requests.Session,
    calls: Sequence[ApiCallReference],
    output_root: Path,
    timeout: Optional[float] = None,
) -> List[ItemOutcome]:
    """Call each discovered API endpoint and store its body as ``<uuid>.json``."""
    outcomes: List[ItemOutcome] = []
    for call in calls:
        logger.info("Calling API: %s", call.url)
        try:
            data = fetch_bytes(session, call.url, timeout)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to call API %s: %s", call.url, exc)
            outcomes.append(ItemOutcome(call.url, error=str(exc)))
            continue

        destination = api_response_path(output_root)
        try:
            destination.write_bytes(data)
        except OSError as exc:
            logger.warning("Failed to write API response %s: %s", destination, exc)
            outcomes.append(ItemOutcome(call.url, error=str(exc)))
            continue

        logger.info("API response saved to: %s", destination)
        outcomes.append(ItemOutcome(call.url, local_path=destination))
    return outcomes


def download_resources(
    session: requests.Session,
    resources: Iterable[ResourceReference],
    base_url: str,
    output_root: Path,
    timeout: Optional[float] = None,
) -> List[ItemOutcome]:
    """Download each resource verbatim into its mapped local path."""
    outcomes: List[ItemOutcome] = []
    for resource in resources:
        try:
            destination = local_path_for(resource.url, base_url, output_root)
            destination.parent.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to process %s: %s", resource.url, exc)
            outcomes.append(ItemOutcome(resource.url, error=str(exc)))
            continue

        logger.info("Downloading: %s", resource.url)
        try:
            data = fetch_bytes(session, resource.url, timeout)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to process %s: %s", resource.url, exc)
            outcomes.append(ItemOutcome(resource.url, error=str(exc)))
            continue

        try:
            destination.write_bytes(data)
        except OSError as exc:
            logger.warning("Failed to write %s: %s", destination, exc)
            outcomes.append(ItemOutcome(resource.url, error=str(exc)))
            continue

        logger.info("Saved to: %s", destination)
        outcomes.append(ItemOutcome(resource.url, local_path=destination))
    return outcomes


def well_known_url(base_url: str, name: str) -> str:
    """Resolve ``name`` against the origin root, ignoring the page's own path."""
    return urljoin(origin_root(base_url), name)


def pull_file(
    session: requests.Session,
    base_url: str,
    output_root: Path,
    name: str,
    timeout: Optional[float] = None,
) -> ItemOutcome:
    """Best-effort retrieval of a single well-known file such as ``robots.txt``."""
    url = well_known_url(base_url, name)
    logger.info("Checking for %s at: %s", name, url)
    try:
        resp = session.get(url, timeout=timeout)
        if not 200 <= resp.status_code < 300:
            logger.info("No %s file found (HTTP %s).", name, resp.status_code)
            return ItemOutcome(url, error=f"HTTP {resp.status_code}")
        data = resp.content
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Failed to download %s: %s", name, exc)
        return ItemOutcome(url, error=str(exc))

    destination = Path(output_root) / name
    try:
        destination.write_bytes(data)
    except OSError as exc:
        logger.warning("Failed to write %s: %s", destination, exc)
        return ItemOutcome(url, error=str(exc))

    logger.info("%s saved to: %s", name, destination)
    return ItemOutcome(url, local_path=destination)


def pull_well_known_files(
    session: requests.Session,
    base_url: str,
    output_root: Path,
    names: Iterable[str],
    timeout: Optional[float] = None,
) -> List[ItemOutcome]:
    return [
        pull_file(session, base_url, output_root, name, timeout) for name in names
    ]
