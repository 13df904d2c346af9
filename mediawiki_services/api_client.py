"""API client implementations the services send their requests through."""

import logging
from collections import deque
from typing import Any, Iterable, Optional, Protocol

import mwclient

logger = logging.getLogger(__name__)


class ApiClientProtocol(Protocol):
    """Protocol for executing MediaWiki API requests."""

    def execute_read_request(self, action: str, params: dict[str, Any]) -> dict:
        """Run a read-only request and return the parsed JSON response."""
        ...

    def execute_write_request(self, action: str, params: dict[str, Any]) -> dict:
        """Run a state-changing request and return the parsed JSON response."""
        ...


def parse_site_url(site_url: str) -> tuple[str, str]:
    """Split a site URL into (host, scheme) the way mwclient wants them."""
    if site_url.startswith('https://'):
        host = site_url[8:]
        scheme = 'https'
    elif site_url.startswith('http://'):
        host = site_url[7:]
        scheme = 'http'
    else:
        host = site_url
        scheme = 'https'

    return host.rstrip('/'), scheme


class MWClientApi:
    """Client backed by an mwclient Site.

    Authentication, transport and retries are left to mwclient. API errors
    (``mwclient.errors.APIError``) are raised to the caller as-is.
    """

    def __init__(
        self,
        site_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        script_path: str = '/w/',
    ):
        host, scheme = parse_site_url(site_url)
        self.site = mwclient.Site(host, path=script_path, scheme=scheme)
        if username and password:
            self.site.login(username, password)

    def execute_read_request(self, action: str, params: dict[str, Any]) -> dict:
        logger.debug("GET action=%s %s", action, params)
        return self.site.get(action, **params)

    def execute_write_request(self, action: str, params: dict[str, Any]) -> dict:
        logger.debug("POST action=%s %s", action, params)
        return self.site.post(action, **params)


class RecordingClient:
    """Client that records requests instead of sending them.

    Responses are taken in order from ``responses``; once they run out an
    empty dict is returned. An exception placed in ``responses`` is raised
    in place of a response. Used for dry runs and as a test double.
    """

    def __init__(self, responses: Optional[Iterable[dict]] = None):
        self.responses = deque(responses or [])
        self.requests: list[tuple[str, str, dict[str, Any]]] = []

    def _respond(self, kind: str, action: str, params: dict[str, Any]) -> dict:
        self.requests.append((kind, action, dict(params)))
        logger.debug("%s action=%s %s (recorded)", kind, action, params)
        if self.responses:
            response = self.responses.popleft()
            if isinstance(response, Exception):
                raise response
            return response
        return {}

    def execute_read_request(self, action: str, params: dict[str, Any]) -> dict:
        return self._respond('read', action, params)

    def execute_write_request(self, action: str, params: dict[str, Any]) -> dict:
        return self._respond('write', action, params)

    @property
    def reads(self) -> list[tuple[str, dict[str, Any]]]:
        return [(action, params) for kind, action, params in self.requests if kind == 'read']

    @property
    def writes(self) -> list[tuple[str, dict[str, Any]]]:
        return [(action, params) for kind, action, params in self.requests if kind == 'write']
