from dataclasses import dataclass
from typing import Optional


DEFAULT_USER_AGENT = "fetchlib/1.0 (+https://example.com; contact: fetchlib@example.com)"
DEFAULT_BASE_URL = "https://reqres.in/api"
JOKE_ENDPOINT = "https://v2.jokeapi.dev/joke/Programming?type=twopart"


@dataclass(frozen=True)
class ClientConfig:
    user_agent: str = DEFAULT_USER_AGENT
    # None leaves urllib3's default in place
    request_timeout: Optional[float] = None
    max_connections: int = 4
    base_url: str = DEFAULT_BASE_URL
    joke_endpoint: str = JOKE_ENDPOINT
