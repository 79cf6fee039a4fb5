"""Download the raw catalog document."""

import logging
from typing import Any

import httpx

from domain.errors import FetchError
from infrastructure.deadline import Deadline

logger = logging.getLogger(__name__)


def fetch_catalog(client: httpx.Client, url: str, *, deadline: Deadline | None = None) -> bytes:
    """
    Issue a single GET for the catalog and return the raw body.

    The client is owned by the caller, and so is its redirect policy. There is
    no retry. A non-2xx status is not treated as an error here; it is logged and
    the body is returned for the parser to judge.

    With a deadline, every timeout of the request is set to the time left and
    the body is streamed so that a slow sender cannot outlive the deadline.
    Without one, the client's own timeouts apply.

    Raises:
        FetchError: On request construction or transport failure, or when the
            deadline runs out
    """
    request_kwargs: dict[str, Any] = {}
    if deadline is not None:
        if deadline.expired:
            raise FetchError(url, "deadline exceeded before the request was sent")
        request_kwargs["timeout"] = httpx.Timeout(deadline.remaining())

    try:
        request = client.build_request("GET", url, **request_kwargs)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError) as e:
        raise FetchError(url, f"invalid request: {e}") from e

    logger.info("Fetching language catalog from %s", url)
    try:
        resp = client.send(request, stream=True)
    except httpx.HTTPError as e:
        raise FetchError(url, str(e) or type(e).__name__) from e

    try:
        if not resp.is_success:
            logger.warning("Catalog request to %s returned HTTP %d", url, resp.status_code)
        chunks: list[bytes] = []
        for chunk in resp.iter_bytes():
            chunks.append(chunk)
            if deadline is not None and deadline.expired:
                raise FetchError(url, f"deadline of {deadline.timeout_s:g}s exceeded while reading the body")
    except httpx.HTTPError as e:
        raise FetchError(url, str(e) or type(e).__name__) from e
    finally:
        resp.close()

    body = b"".join(chunks)
    logger.info("Fetched %d bytes (status=%d)", len(body), resp.status_code)
    return body
