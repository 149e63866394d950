from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Protocol, Union

from .errors import FetchError


ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclass(frozen=True)
class RequestOptions:
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def __post_init__(self) -> None:
        method = (self.method or "").upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", dict(self.headers))


@dataclass(frozen=True)
class Ok:
    payload: Any

    ok = True

    @property
    def error(self) -> None:
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.payload, None))


@dataclass(frozen=True)
class Err:
    error: FetchError

    ok = False

    def __post_init__(self) -> None:
        if self.error is None:
            raise ValueError("Err requires an error")

    @property
    def payload(self) -> None:
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter((None, self.error))


Result = Union[Ok, Err]


class ResponseProtocol(Protocol):
    status: int
    reason: str
    headers: Mapping[str, str]

    def read(self) -> bytes: ...

    def release(self) -> None: ...


class TransportProtocol(Protocol):
    def send(self, url: str, options: RequestOptions) -> ResponseProtocol: ...

    def close(self) -> None: ...
