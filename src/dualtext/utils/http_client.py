"""
HTTP client utilities for DualText Translator.
Provides a single-shot async HTTP client with proxy support and explicit timeouts.
"""

from typing import Dict, Optional, Any
from urllib.parse import urlparse

import httpx
from httpx import AsyncClient, Timeout
import structlog

from .. import __version__

logger = structlog.get_logger(__name__)


class HTTPClient:
    """Async HTTP client that opens one connection per request.

    No connection pool is kept between calls and nothing is retried: every
    request either returns a response or raises ``httpx.HTTPError``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        proxy_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Read/write timeout in seconds
            connect_timeout: Connect timeout in seconds
            proxy_url: Optional proxy for outbound requests
            transport: Optional transport override (used by tests and embedding hosts)
        """
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.transport = transport
        self.proxy_url = self._configure_proxy(proxy_url)
        self._default_headers: Dict[str, str] = {
            "User-Agent": f"DualText-Translator/{__version__}",
            "Accept": "application/json",
        }

    @classmethod
    def from_config(cls, config: Any, transport: Optional[httpx.AsyncBaseTransport] = None) -> "HTTPClient":
        """Create a client from application configuration."""
        return cls(
            timeout=getattr(config, "request_timeout", 10.0),
            proxy_url=getattr(config, "proxy_url", None),
            transport=transport,
        )

    def _configure_proxy(self, proxy_url: Optional[str]) -> Optional[str]:
        """Validate the proxy URL, dropping it if unusable."""
        if not proxy_url:
            return None

        parsed = urlparse(proxy_url)
        if not parsed.scheme or not parsed.hostname:
            logger.warning("Ignoring invalid proxy URL", scheme=parsed.scheme)
            return None

        logger.info("Proxy configured", proxy=f"{parsed.scheme}://{parsed.hostname}:{parsed.port}")
        return proxy_url

    def _create_client(self) -> AsyncClient:
        """Create a short-lived client for a single request."""
        client_kwargs: Dict[str, Any] = {}
        if self.transport is not None:
            client_kwargs["transport"] = self.transport
        elif self.proxy_url:
            client_kwargs["proxy"] = self.proxy_url

        return AsyncClient(
            **client_kwargs,
            timeout=Timeout(
                connect=self.connect_timeout,
                read=self.timeout,
                write=self.timeout,
                pool=self.connect_timeout,
            ),
            follow_redirects=True,
            headers=self._default_headers,
        )

    async def request(
        self,
        method: str,
        url: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        The response body is fully read before the connection is released.

        Args:
            method: HTTP method
            url: URL to request
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response

        Raises:
            httpx.HTTPError: On any transport-level failure
        """
        # Query strings may carry credentials; only host and path are logged.
        parsed = urlparse(url)
        log = logger.bind(method=method, host=parsed.hostname, path=parsed.path)

        log.debug("HTTP request started")
        try:
            async with self._create_client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            log.warning("HTTP request failed", error_type=type(e).__name__)
            raise

        log.debug("HTTP request completed", status_code=response.status_code)
        return response

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Make GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        """Make POST request."""
        return await self.request("POST", url, **kwargs)
