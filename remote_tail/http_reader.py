"""HTTP reader that fetches only the appended part of a file using Range requests."""

import logging
import time

import httpx

from remote_tail.errors import TransportIO, UnexpectedPartialContent, UnexpectedStatus
from remote_tail.models import FetchResult

logger = logging.getLogger(__name__)


def _total_from_content_range(value: str | None) -> int | None:
    """Parse the complete length out of ``bytes a-b/total``. None if absent or ``*``."""
    if not value or "/" not in value:
        return None
    total = value.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return None
    return int(total)


class HttpReader:
    """Polls a file served over HTTP(S).

    With a stored offset the request asks for ``bytes=<offset-1>-``. The extra
    byte overlaps what was already read: a 206 answer starts with one consumed
    byte, while a 200 answer means the server ignored the range and sent the
    whole file.
    """

    def __init__(self, url: str, timeout: float = 5.0, transport: httpx.BaseTransport | None = None):
        self._url = url
        self._timeout = timeout
        self._range_unsupported = False
        self._total_length: int | None = None
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def range_unsupported(self) -> bool:
        return self._range_unsupported

    def fetch(self, offset: int) -> FetchResult:
        headers = {"Accept-Encoding": "identity"}
        if offset > 0:
            headers["Range"] = f"bytes={offset - 1}-"

        # httpx times out per phase; the deadline caps the whole request.
        deadline = time.monotonic() + self._timeout
        try:
            with self._client.stream("GET", self._url, headers=headers) as resp:
                body = self._read_body(resp, deadline)
        except httpx.HTTPError as e:
            raise TransportIO(f"request to {self._url} failed: {e!r}") from e

        status = resp.status_code
        if status == httpx.codes.REQUESTED_RANGE_NOT_SATISFIABLE:
            logger.debug("Server returned 416 for offset %d", offset)
            self._total_length = None
            return FetchResult(truncated=True)

        if status not in (httpx.codes.OK, httpx.codes.PARTIAL_CONTENT):
            raise UnexpectedStatus(status, resp.reason_phrase)

        skip_bytes = 0
        if offset > 0:
            if status == httpx.codes.PARTIAL_CONTENT:
                # Assumes the body starts exactly at the requested byte.
                skip_bytes = 1
            else:
                if not self._range_unsupported:
                    logger.warning("Server doesn't support range requests, fetching whole file")
                    self._range_unsupported = True
                skip_bytes = offset
        elif status == httpx.codes.PARTIAL_CONTENT:
            raise UnexpectedPartialContent("expected 200, got 206")

        if status == httpx.codes.PARTIAL_CONTENT:
            total = _total_from_content_range(resp.headers.get("Content-Range"))
        else:
            total = len(body)

        if total is not None:
            shrunk = self._total_length is not None and total < self._total_length
            if shrunk or (status == httpx.codes.OK and total < offset):
                logger.debug(
                    "Total length decreased (old %s, new %d, offset %d)",
                    self._total_length, total, offset,
                )
                self._total_length = None
                return FetchResult(truncated=True)
            self._total_length = total

        if not body:
            logger.debug("Empty response from %s", self._url)
            return FetchResult()

        return FetchResult(data=body, skip_bytes=skip_bytes)

    def _read_body(self, resp: httpx.Response, deadline: float) -> bytes:
        chunks = []
        for chunk in resp.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise TransportIO(f"request to {self._url} exceeded {self._timeout}s deadline")
        return b"".join(chunks)

    def close(self):
        self._client.close()
