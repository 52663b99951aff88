"""HTTP client for the Teamhood REST API.

All requests carry the raw API key in the ``Authorization`` header (Teamhood
does not use a bearer scheme). Responses are returned as decoded JSON; an
empty body decodes to ``{}``.
"""
import base64
import binascii
import logging
from typing import Any, Optional

import httpx

from .config import Settings
from .errors import BackendError, InvalidArgumentError, TeamhoodError

logger = logging.getLogger("teamhood-mcp.client")

BODY_METHODS = ("POST", "PUT")


class TeamhoodClient:
    """Thin async wrapper around ``httpx.AsyncClient`` bound to one API key.

    Use as an async context manager::

        async with TeamhoodClient(api_key, base_url) as client:
            workspaces = await client.request("/workspaces")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = httpx.AsyncClient(
            headers={"Authorization": api_key},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TeamhoodClient":
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TeamhoodClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        path_and_query: str,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        """Send one JSON request and return the decoded response.

        ``body`` is only sent for POST and PUT. Raises ``BackendError`` for
        non-2xx responses with the raw response text preserved.
        """
        response = await self._send(path_and_query, method, body)
        return self._decode(response)

    async def request_content(self, path_and_query: str) -> Any:
        """GET a content endpoint without assuming the payload is JSON.

        JSON payloads are decoded and UTF-8 text is returned as is. Binary
        payloads come back as ``{"encoding": "base64", "content": ...}`` (the
        same encoding upload_attachment accepts) so no byte is lost.
        """
        response = await self._send(path_and_query, "GET", None)
        try:
            return self._decode(response)
        except TeamhoodError:
            pass

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug(f"Binary content from {path_and_query} ({len(response.content)} bytes)")
            return {
                "encoding": "base64",
                "content": base64.b64encode(response.content).decode("ascii"),
            }

    async def upload(self, item_id: str, name: str, content: str) -> Any:
        """Upload an attachment as multipart form data.

        ``content`` is base64 encoded and is decoded to raw bytes before it is
        sent as the ``Content`` file part. The multipart encoder sets the
        Content-Type header (with its boundary).
        """
        try:
            # Wrapped output (base64 CLI, encodebytes) carries line breaks
            data = base64.b64decode("".join(content.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidArgumentError(f"content is not valid base64: {e}") from e

        url = f"{self.base_url}/attachments"
        logger.debug(f"POST {url} (multipart, {len(data)} bytes)")
        response = await self._http.post(
            url,
            data={"ItemId": item_id, "Name": name},
            files={"Content": (name, data)},
        )
        if not response.is_success:
            raise BackendError(response.status_code, response.text)
        return self._decode(response)

    async def _send(self, path_and_query: str, method: str, body: Any) -> httpx.Response:
        method = method.upper()
        url = f"{self.base_url}{path_and_query}"
        # httpx sets Content-Type: application/json when json= is given
        kwargs = {"json": body} if body is not None and method in BODY_METHODS else {}

        logger.debug(f"{method} {url}")
        response = await self._http.request(method, url, **kwargs)
        if not response.is_success:
            raise BackendError(response.status_code, response.text)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        text = response.text
        if not text:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TeamhoodError(
                f"Malformed response body from {response.request.url}: {e}"
            ) from e
