import os
import sys

import httpx
import pytest
import pytest_asyncio

# Ensure repository root is on sys.path so `from weartube ...` works
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Settings read the environment at import time
os.environ["YOUTUBE_API_KEY"] = os.environ.get("YOUTUBE_API_KEY", "test-key")

from weartube.config import Settings
from weartube.youtube_client import YouTubeClient

BASE_URL = "https://yt.test/youtube/v3"


class FakeYouTube:
    """MockTransport handler: queued responses per endpoint, every request recorded."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._queues: dict[str, list] = {}

    def add(self, endpoint, status=200, json=None, exc=None):
        self._queues.setdefault(endpoint, []).append((status, json, exc))
        return self

    def calls(self, endpoint):
        return [r for r in self.requests if r.url.path.endswith("/" + endpoint)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        queue = self._queues.get(endpoint)
        if not queue:
            raise AssertionError(f"unexpected request to {endpoint}")
        status, body, exc = queue.pop(0)
        if exc is not None:
            raise exc
        return httpx.Response(status, json=body)


@pytest.fixture
def settings():
    return Settings(youtube_api_key="test-key", youtube_base_url=BASE_URL)


@pytest.fixture
def fake():
    return FakeYouTube()


@pytest_asyncio.fixture
async def client(settings, fake):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake)) as http:
        yield YouTubeClient(settings, http=http, choice=lambda topics: topics[0])
