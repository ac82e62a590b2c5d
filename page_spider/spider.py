"""High-level orchestration for spidering a single page."""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import requests

from .config import SpiderConfig
from .content import extract_api_calls, extract_resources, parse_html
from .downloads import call_apis, download_resources, pull_well_known_files
from .models import SpiderResult

logger = logging.getLogger("page_spider")


def fetch_page(
    session: requests.Session,
    url: str,
    timeout: Optional[float],
) -> str:
    """Fetch the target page as text; any transport or HTTP error propagates."""
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def spider_page(
    url: str,
    config: SpiderConfig,
    session: Optional[requests.Session] = None,
) -> SpiderResult:
    """Fetch ``url``, then download everything it references into ``config.output_root``.

    A failed page fetch aborts the run and is reported via
    ``SpiderResult.page_error``; every later item fails on its own.
    A session passed in by the caller is left open.
    """
    output_root = Path(config.output_root)
    output_root.mkdir(parents=True, exist_ok=True)
    result = SpiderResult(page_url=url, output_root=output_root)

    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())

        start = time.perf_counter()
        try:
            logger.info("Loading %s", url)
            html = fetch_page(session, url, config.timeout)
        except (requests.RequestException, ValueError) as exc:
            logger.error("Error fetching %s: %s", url, exc)
            result.page_error = str(exc)
            return result

        soup = parse_html(html)
        resources = extract_resources(soup, url)
        api_calls = extract_api_calls(html, url)
        logger.debug(
            "Found %d resource(s) and %d API call(s) in %s",
            len(resources),
            len(api_calls),
            url,
        )

        result.api_calls = call_apis(session, api_calls, output_root, config.timeout)
        result.resources = download_resources(
            session, resources, url, output_root, config.timeout
        )
        result.well_known = pull_well_known_files(
            session, url, output_root, config.well_known_files, config.timeout
        )
        logger.debug("Spidered %s in %.2fs", url, time.perf_counter() - start)

    logger.info("All resources downloaded.")
    return result
