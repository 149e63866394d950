import logging
from typing import Mapping, Optional

import urllib3
from urllib3 import exceptions as urllib3_exc
from urllib3.util.retry import Retry

from .config import ClientConfig
from .errors import TransportError
from .types import RequestOptions


logger = logging.getLogger(__name__)


class HttpResponse:
    """Un-preloaded urllib3 response; the body is read on demand."""

    def __init__(self, url: str, raw: urllib3.BaseHTTPResponse):
        self.url = url
        self._raw = raw
        self.status: int = raw.status
        self.reason: str = raw.reason or ""
        self.headers: Mapping[str, str] = raw.headers

    def read(self) -> bytes:
        try:
            return self._raw.read() or b""
        except (urllib3_exc.HTTPError, OSError) as exc:
            raise TransportError(f"Failed reading response body: {exc}", url=self.url) from exc
        finally:
            self._raw.release_conn()

    def release(self) -> None:
        # unread bodies keep the connection checked out of the pool
        self._raw.drain_conn()
        self._raw.release_conn()


class HttpTransport:
    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.timeout = (
            urllib3.Timeout(total=self.config.request_timeout)
            if self.config.request_timeout is not None
            else urllib3.Timeout.DEFAULT_TIMEOUT
        )
        # single attempt; redirects are still followed
        self.retries = Retry(total=None, connect=0, read=0, status=0, other=0, redirect=5, raise_on_status=False)
        self.http = urllib3.PoolManager(
            maxsize=max(1, self.config.max_connections),
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/json, text/plain, */*",
            },
            retries=self.retries,
        )

    def _merged_headers(self, options: RequestOptions) -> urllib3.HTTPHeaderDict:
        headers = urllib3.HTTPHeaderDict(self.http.headers)
        headers.update(options.headers)
        return headers

    def send(self, url: str, options: RequestOptions) -> HttpResponse:
        logger.debug("%s %s", options.method, url)
        try:
            raw = self.http.request(
                options.method,
                url,
                body=options.body.encode("utf-8") if options.body is not None else None,
                headers=self._merged_headers(options),
                timeout=self.timeout,
                retries=self.retries,
                preload_content=False,
            )
        except (urllib3_exc.HTTPError, OSError) as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc
        return HttpResponse(url, raw)

    def close(self) -> None:
        self.http.clear()
