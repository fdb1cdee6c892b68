"""Transport for report documents published over HTTP(S)."""

from __future__ import annotations

import httpx

from trparser.config import get_settings
from trparser.core.exceptions import RemoteDocumentError
from trparser.logging import get_logger

logger = get_logger(__name__)


async def fetch_document(
    url: str,
    headers: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> str:
    """Download a report document.

    Args:
        url: Full URL of the document.
        headers: Extra request headers (e.g. Authorization).
        timeout: Request timeout in seconds (defaults to settings.http_timeout).

    Returns:
        The response body as text.

    Raises:
        RemoteDocumentError: On transport errors or HTTP status >= 400.
    """
    if timeout is None:
        timeout = get_settings().http_timeout

    async with httpx.AsyncClient(follow_redirects=True) as client:
        try:
            response = await client.get(url, headers=headers or {}, timeout=timeout)
        except httpx.RequestError as e:
            logger.warning("remote_fetch_failed", url=url, error=str(e))
            raise RemoteDocumentError(url, str(e)) from e

    if response.status_code >= 400:
        logger.warning("remote_fetch_failed", url=url, status_code=response.status_code)
        raise RemoteDocumentError(url, response.reason_phrase or "HTTP error", status_code=response.status_code)

    logger.debug("remote_document_fetched", url=url, size=len(response.content))
    return response.text
