"""Mapping of remote URLs onto the local output tree."""

from __future__ import annotations

import re
import uuid
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

DEFAULT_PAGE_NAME = "index.html"
PAGE_SUFFIX = ".html"

# URLs outside the base directory are stored under this folder.
OUTSIDE_BASE_DIR = "_root"
# In-base first segments that could be mistaken for OUTSIDE_BASE_DIR.
_RESERVED_HEAD = re.compile(r"_+root")


def base_directory(base_url: str) -> str:
    """Path of the directory ``base_url`` lives in, always ending in ``/``."""
    path = urlsplit(base_url).path
    return path[: path.rfind("/") + 1] or "/"


def relative_path_for(url: str, base_url: str) -> str:
    """Derive the POSIX-style relative path a resource is stored under.

    Paths inside the base URL's directory keep the remainder after that
    directory. Anything else goes under ``_root/`` with its full path, and
    in-directory names shaped like ``_root`` gain an extra leading underscore,
    so the two ranges never meet. Query strings and fragments are dropped,
    so URLs differing only by query share a path.
    """
    path = urlsplit(url).path or "/"
    directory = base_directory(base_url)
    if path.startswith(directory):
        remainder = unquote(path[len(directory):]).lstrip("/")
        head = remainder.split("/", 1)[0]
        if _RESERVED_HEAD.fullmatch(head):
            remainder = "_" + remainder
    else:
        remainder = f"{OUTSIDE_BASE_DIR}/" + unquote(path).lstrip("/")

    if not remainder:
        return DEFAULT_PAGE_NAME
    if remainder.endswith("/"):
        return remainder + DEFAULT_PAGE_NAME
    if not PurePosixPath(remainder).suffix:
        remainder += PAGE_SUFFIX
    return remainder


def local_path_for(url: str, base_url: str, output_root: Path) -> Path:
    """Return the file path under ``output_root`` for ``url``.

    Raises ``ValueError`` when the derived path would leave ``output_root``.
    """
    root = Path(output_root).resolve()
    relative = PurePosixPath(relative_path_for(url, base_url))
    destination = root.joinpath(*relative.parts).resolve()
    if destination != root and root not in destination.parents:
        raise ValueError(f"Refusing to write outside {root}: {relative}")
    return destination


def api_response_path(output_root: Path) -> Path:
    """Fresh, collision-free ``<uuid>.json`` path directly under ``output_root``."""
    return Path(output_root) / f"{uuid.uuid4()}.json"
