"""API client for bunny.net Edge Storage."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import httpx

from . import __version__
from .config import base_url as region_base_url
from .config import config
from .exceptions import (
    BunnyAPIError,
    BunnyAuthenticationError,
    BunnyConfigError,
    BunnyInvalidResponseError,
    BunnyNetworkError,
    BunnyNotFoundError,
    BunnyPermissionError,
)
from .models import StorageObject, parse_listing
from .utils import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

API_KEY_HEADER = "AccessKey"
USER_AGENT = f"pybunnysync/{__version__}"


class BunnyStorageClient:
    """Client for the bunny.net storage API.

    Paths are addressed as ``zone/dir/file``; a leading slash is accepted.
    Directory listings need a trailing slash (``zone/dir/``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        region: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize storage API client.

        Args:
            api_key: Storage zone password (uses BUNNYSYNC_API_KEY if not provided)
            api_url: Explicit base URL (overrides region)
            region: Region code used to pick the base URL (default: environment)
            timeout: Request timeout in seconds (default: 60.0)
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key or config.api_key
        api_url = api_url or region_base_url(region or config.region)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

        if not self.api_key:
            raise BunnyConfigError(
                "API key not configured. "
                "Please set BUNNYSYNC_API_KEY environment variable."
            )

        self._client: httpx.Client | None = None

    def __enter__(self) -> BunnyStorageClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                headers={API_KEY_HEADER: self.api_key, "User-Agent": USER_AGENT},
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def _url(self, path: str) -> str:
        """Build the request URL for a storage path.

        Each segment is percent-encoded so that names containing ``#``,
        ``?``, ``%`` or spaces address their own object.

        Examples:
            >>> client._url("/my-zone/notes#draft.txt")
            'https://storage.bunnycdn.com/my-zone/notes%23draft.txt'
        """
        encoded = urllib.parse.quote(path.lstrip("/"), safe="/")
        return f"{self.api_url}/{encoded}"

    def _handle_http_error(self, response: httpx.Response, path: str) -> None:
        """Raise the exception matching a non-2xx response.

        Args:
            response: The failed response
            path: Storage path the request was made for

        Raises:
            BunnyAuthenticationError: On 401
            BunnyPermissionError: On 403
            BunnyNotFoundError: On 404
            BunnyAPIError: On any other non-2xx status
        """
        status_code = response.status_code

        if status_code == 401:
            raise BunnyAuthenticationError("Remote unauthorized", status_code)
        elif status_code == 403:
            raise BunnyPermissionError(
                f"Forbidden: Access denied to path {path}", status_code
            )
        elif status_code == 404:
            raise BunnyNotFoundError(
                f"Not found: Path {path} does not exist", status_code
            )

        error_msg = (
            f"{response.request.method} {response.request.url} failed: "
            f"HTTP {status_code}"
        )
        # The storage API reports details as {"HttpCode": ..., "Message": ...}
        try:
            if response.content:
                error_data = response.json()
                if isinstance(error_data, dict) and error_data.get("Message"):
                    error_msg = f"{error_msg}: {error_data['Message']}"
        except ValueError:
            pass
        raise BunnyAPIError(error_msg, status_code)

    def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        """Make an API request.

        There is no retry: the first failure is raised to the caller.

        Args:
            method: HTTP method
            path: Storage path (``zone/dir/file``)
            **kwargs: Additional arguments passed to httpx

        Returns:
            The successful response

        Raises:
            BunnyAPIError: If the request fails
        """
        url = self._url(path)
        client = self._get_client()
        logger.debug(f"{method} {url}")

        try:
            response = client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise BunnyNetworkError(f"Network error: {e}") from e

        if not response.is_success:
            self._handle_http_error(response, path)
        return response

    # =========================
    # Storage Operations
    # =========================

    def list_objects(self, path: str) -> list[StorageObject]:
        """List the immediate children of a pseudo-directory.

        Args:
            path: Directory path, e.g. ``zone/`` or ``zone/sub/``

        Returns:
            Files and sub-directories directly under ``path``
        """
        response = self._request(
            "GET", path, headers={"Accept": "application/json"}
        )
        try:
            payload = response.json()
        except ValueError as e:
            raise BunnyInvalidResponseError(
                f"Invalid JSON listing for {path}"
            ) from e
        return parse_listing(payload)

    def put_object(self, path: str, data: bytes) -> None:
        """Upload bytes to ``path``, replacing any existing object."""
        self._request(
            "PUT",
            path,
            content=data,
            headers={"Content-Type": "application/octet-stream"},
        )

    def get_object(self, path: str) -> bytes:
        """Download the object at ``path``."""
        response = self._request("GET", path, headers={"Accept": "*/*"})
        return response.content

    def delete_object(self, path: str) -> None:
        """Delete the object at ``path``."""
        self._request("DELETE", path)
