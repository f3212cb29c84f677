"""Shared test fixtures and utilities."""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from weaviate_kb.vectorstore.client import WeaviateClient

BASE_URL = "http://weaviate.test"


class FakeWeaviate:
    """In-memory stand-in for the Weaviate HTTP API built on httpx.MockTransport.

    Routes are keyed by (method, path). Each route holds a queue of responses;
    the last response is reused once the queue is drained. Unknown routes
    answer 404.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> "FakeWeaviate":
        """Queue a response (or a transport error) for a route."""
        self.routes.setdefault((method, path), []).append(
            {"status_code": status_code, "json": json_body, "text": text, "error": error}
        )
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": [{"message": "not found"}]})

        spec = queue.pop(0) if len(queue) > 1 else queue[0]
        if spec["error"] is not None:
            raise spec["error"]
        if spec["text"] is not None:
            return httpx.Response(spec["status_code"], text=spec["text"])
        if spec["json"] is not None:
            return httpx.Response(spec["status_code"], json=spec["json"])
        return httpx.Response(spec["status_code"])

    def client(self) -> WeaviateClient:
        http_client = httpx.Client(
            base_url=BASE_URL, transport=httpx.MockTransport(self.handler)
        )
        return WeaviateClient(url=BASE_URL, http_client=http_client)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def bodies(self, method: str, path: str) -> List[Any]:
        return [json.loads(r.content) for r in self.calls(method, path)]


@pytest.fixture
def fake_weaviate():
    """Create an empty FakeWeaviate."""
    return FakeWeaviate()


@pytest.fixture
def fresh_weaviate(fake_weaviate):
    """FakeWeaviate where the Document class is missing but can be created and written to."""
    fake_weaviate.add("POST", "/v1/schema", 200, json_body={"class": "Document"})
    fake_weaviate.add("POST", "/v1/objects", 200, json_body={"id": "uuid-1"})
    return fake_weaviate
