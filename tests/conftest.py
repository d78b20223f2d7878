import pytest
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from unittest.mock import patch

import structlog

from nunu_upload_action.installer.cache import ToolCache
from nunu_upload_action.logging import CompactJSONRenderer
from nunu_upload_action.types import ToolConfig


class FakeContent:
    def __init__(self, chunks: List[bytes]):
        self.chunks = chunks

    async def _iter(self):
        for chunk in self.chunks:
            yield chunk

    def iter_chunked(self, size: int):
        return self._iter()


class FakeResponse:
    """Stand-in for aiohttp.ClientResponse used as an async context manager"""

    def __init__(
        self,
        status: int = 200,
        json_data: Any = None,
        chunks: Optional[List[bytes]] = None,
        reason: str = "OK",
    ):
        self.status = status
        self.reason = reason
        self._json = json_data
        self.content = FakeContent(chunks or [])

    async def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Routable replacement for aiohttp.ClientSession recording every GET"""

    def __init__(self):
        self.routes: Dict[str, Union[FakeResponse, Exception]] = {}
        self.requests: List[str] = []
        self.session_headers: List[Optional[dict]] = []

    def __call__(self, *args, headers=None, **kwargs):
        self.session_headers.append(headers)
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def get(self, url: str, **kwargs):
        self.requests.append(url)
        response = self.routes.get(url, FakeResponse(status=404, reason="Not Found"))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def http():
    """Patch aiohttp so no test touches the network"""
    session = FakeSession()
    with patch("aiohttp.ClientSession", session):
        yield session


@pytest.fixture
def tool() -> ToolConfig:
    """Tool coordinates pointing at fake hosts"""
    return ToolConfig(
        api_base="https://api.example.test",
        download_base="https://downloads.example.test",
    )


@pytest.fixture
def cache(tmp_path: Path) -> ToolCache:
    return ToolCache(tmp_path / "tool-cache")


@pytest.fixture
def latest_url() -> str:
    return "https://api.example.test/repos/nunu-ai/nunu-cli/releases/latest"


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture(autouse=True)
def stdlib_logging():
    """Send structlog events through stdlib logging so stdout only carries workflow commands"""
    structlog.configure(
        processors=[structlog.stdlib.add_log_level, CompactJSONRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    yield
    structlog.reset_defaults()
