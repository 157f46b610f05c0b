"""
Shared HTTP sessions for the flight data providers.

AirLabs, OpenSky and AeroDataBox are each polled from worker threads every
few seconds, so keeping one keep-alive session per host saves a TLS
handshake on every poll.
"""

import logging
import threading
from typing import Dict, Tuple, Union
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)

USER_AGENT = 'WhatTheFlight/1.0'

DEFAULT_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'application/json',
    'Connection': 'keep-alive',
}

Timeout = Union[float, Tuple[float, float]]


class APIConnectionPool:
    """
    One pooled requests Session per scheme and host.

    Nothing is retried here: a failed call surfaces straight away so the
    aircraft service can fall through to the next provider.
    """

    def __init__(self, pool_connections: int = 10, pool_maxsize: int = 20,
                 timeout: Timeout = 15.0):
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        # Seconds, or (connect, read)
        self.timeout = timeout

        self._sessions: Dict[str, requests.Session] = {}
        self._lock = threading.Lock()

    def _new_session(self) -> requests.Session:
        adapter = HTTPAdapter(pool_connections=self.pool_connections,
                              pool_maxsize=self.pool_maxsize,
                              max_retries=0)
        session = requests.Session()
        for prefix in ('http://', 'https://'):
            session.mount(prefix, adapter)
        session.headers.update(DEFAULT_HEADERS)
        return session

    def get_session(self, url: str) -> requests.Session:
        """Return the session for the URL's host, creating it on first use."""
        parts = urlsplit(url)
        host_key = f"{parts.scheme}://{parts.netloc}"

        with self._lock:
            session = self._sessions.get(host_key)
            if session is None:
                session = self._sessions[host_key] = self._new_session()
                logger.debug(f"Opened HTTP session for {host_key}")
            return session

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send a request on the host's session, applying the pool timeout unless given."""
        kwargs.setdefault('timeout', self.timeout)
        parts = urlsplit(url)

        response = self.get_session(url).request(method, url, **kwargs)
        logger.debug(f"{method} {parts.netloc}{parts.path} -> {response.status_code} "
                     f"({response.elapsed.total_seconds():.2f}s)")
        return response

    def get(self, url: str, **kwargs) -> requests.Response:
        return self.request('GET', url, **kwargs)

    def close(self) -> None:
        """Close every open session."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()

        for session in sessions:
            session.close()
        if sessions:
            logger.info(f"Closed {len(sessions)} HTTP session(s)")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
