"""Generic fetch helper.

``fetch_data`` never raises for network, status or decoding failures; it
returns ``Ok(payload)`` or ``Err(error)``, both of which unpack into a
``(payload, error)`` pair::

    payload, error = await fetch_data("https://reqres.in/api/users")
    if error:
        ...
"""
import asyncio
import codecs
import json
import logging
import time
from typing import Any, Mapping, Optional

from .errors import FetchError, HttpStatusError, ParseError, TransportError
from .metrics import OK, Metrics
from .net import HttpTransport
from .types import Err, Ok, RequestOptions, Result, TransportProtocol


logger = logging.getLogger(__name__)


def _content_type(headers: Mapping[str, str]) -> Optional[str]:
    value = headers.get("content-type")
    if value is None:
        # plain dicts are not case-insensitive
        value = headers.get("Content-Type")
    return value


def _charset(content_type: Optional[str]) -> str:
    if content_type:
        for param in content_type.split(";")[1:]:
            key, _, value = param.strip().partition("=")
            if key.lower() == "charset" and value:
                charset = value.strip().strip('"')
                try:
                    codecs.lookup(charset)
                except LookupError:
                    break
                return charset
    return "utf-8"


def decode_body(body: bytes, content_type: Optional[str], url: Optional[str] = None) -> Any:
    """Parse JSON when the content type says so, otherwise return text."""
    if content_type is not None and "application/json" in content_type.lower():
        try:
            return json.loads(body.decode(_charset(content_type), errors="strict"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise ParseError(f"Invalid JSON body: {exc}", content_type=content_type, url=url) from exc
    return body.decode(_charset(content_type), errors="replace")


async def fetch_data(
    url: str,
    options: Optional[RequestOptions] = None,
    *,
    transport: Optional[TransportProtocol] = None,
    metrics: Optional[Metrics] = None,
) -> Result:
    if not url:
        raise ValueError("url must be a non-empty string")
    options = options or RequestOptions()
    owns_transport = transport is None
    if transport is None:
        transport = HttpTransport()

    t0 = time.perf_counter()
    size_bytes = 0
    try:
        response = await asyncio.to_thread(transport.send, url, options)
        try:
            if not 200 <= response.status <= 299:
                raise HttpStatusError(response.status, response.reason, url=url)
            body = await asyncio.to_thread(response.read)
        finally:
            await asyncio.to_thread(response.release)
        size_bytes = len(body)
        payload = decode_body(body, _content_type(response.headers), url=url)
    except OSError as exc:
        result: Result = Err(TransportError(str(exc), url=url))
    except FetchError as exc:
        result = Err(exc)
    else:
        result = Ok(payload)
    finally:
        if owns_transport:
            transport.close()

    dt_ms = (time.perf_counter() - t0) * 1000.0
    if isinstance(result, Err):
        logger.error(result.error.message)
    if metrics is not None:
        outcome = OK if result.ok else type(result.error).__name__
        metrics.record_fetch(outcome, size_bytes, dt_ms)
    return result
