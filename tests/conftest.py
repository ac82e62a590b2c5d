from __future__ import annotations

from typing import Dict, List, Optional, Union

import requests

Route = Union[bytes, str, int, Exception, requests.Response]


def make_response(url: str, body: bytes = b"", status: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.url = url
    resp.encoding = "utf-8"
    resp.reason = "OK" if status < 400 else "Error"
    return resp


class FakeSession:
    """Stand-in for ``requests.Session`` serving canned responses by URL.

    Routes map a URL to bytes/str (200 body), an int (empty body with that
    status), an exception instance (raised) or a prepared response. Unknown
    URLs get a 404.
    """

    def __init__(self, routes: Optional[Dict[str, Route]] = None) -> None:
        self.routes: Dict[str, Route] = dict(routes or {})
        self.requested: List[str] = []
        self.timeouts: List[Optional[float]] = []
        self.closed = False

    def get(self, url: str, timeout: Optional[float] = None) -> requests.Response:
        self.requested.append(url)
        self.timeouts.append(timeout)
        route = self.routes.get(url, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, requests.Response):
            return route
        if isinstance(route, int):
            return make_response(url, b"", route)
        if isinstance(route, str):
            route = route.encode("utf-8")
        return make_response(url, route)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
