from typing import Any, Dict, List, Tuple

import httpx
import pytest

from wormbase_gateway.clients.wormbase import WormBaseClient
from wormbase_gateway.routers.tools import ToolRouter

REST = "http://rest.test"
SEARCH = "http://search.test/search"


class FakeWormBase:
    """Path-keyed stand-in for rest.wormbase.org and the search service."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, payload: Any = None, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    def fail(self, path: str) -> None:
        self.routes[path] = (0, None)

    def widget(self, entity_type: str, entity_id: str, widget: str, payload: Any = None, status: int = 200) -> None:
        self.add(f"/rest/widget/{entity_type}/{entity_id}/{widget}", payload, status)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        status, payload = route
        if status == 0:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(status, json=payload)

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def searched(self) -> bool:
        return any(p.startswith("/search/") for p in self.paths)


@pytest.fixture
def upstream() -> FakeWormBase:
    return FakeWormBase()


@pytest.fixture
def client(upstream: FakeWormBase) -> WormBaseClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return WormBaseClient(REST, search_url=SEARCH, http=http)


@pytest.fixture
def tool_router(client: WormBaseClient) -> ToolRouter:
    return ToolRouter(client)
