import json
from typing import Optional, Union

from .config import DEFAULT_BASE_URL, JOKE_ENDPOINT
from .fetch import fetch_data
from .metrics import Metrics
from .types import RequestOptions, Result, TransportProtocol


class ReqresApi:
    """Thin helpers over the reqres.in demo API.

    Every method returns the ``Result`` of a single ``fetch_data`` call.
    DELETE answers 204 with no body, so its payload is an empty string.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[TransportProtocol] = None,
        metrics: Optional[Metrics] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.metrics = metrics

    def _url(self, *parts: Union[str, int]) -> str:
        return "/".join([self.base_url, *(str(p) for p in parts)])

    async def _fetch(self, url: str, options: Optional[RequestOptions] = None) -> Result:
        return await fetch_data(url, options, transport=self.transport, metrics=self.metrics)

    async def get_users(self) -> Result:
        return await self._fetch(self._url("users"))

    async def get_user(self, user_id: Union[str, int]) -> Result:
        return await self._fetch(self._url("users", user_id))

    async def get_resource(self, resource_id: Union[str, int]) -> Result:
        return await self._fetch(self._url("unknown", resource_id))

    async def create_user(self, name: str, job: str) -> Result:
        options = RequestOptions(
            method="POST",
            headers={"Content-Type": "application/json"},
            body=json.dumps({"name": name, "job": job}),
        )
        return await self._fetch(self._url("users"), options)

    async def delete_user(self, user_id: Union[str, int]) -> Result:
        return await self._fetch(self._url("users", user_id), RequestOptions(method="DELETE"))


async def get_joke(
    endpoint: str = JOKE_ENDPOINT,
    transport: Optional[TransportProtocol] = None,
    metrics: Optional[Metrics] = None,
) -> Result:
    return await fetch_data(endpoint, transport=transport, metrics=metrics)
