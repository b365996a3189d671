"""
Routedoc — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Session-scoped:
    └── api_tree / api_document: the Petstore route tree and its document

    Function-scoped:
    ├── make_request: builds a RequestContext (no HTTP involved)
    └── test_client: HTTPX AsyncClient talking to a fresh app over ASGI
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["ROUTEDOC_LOG_LEVEL"] = "WARNING"
os.environ["ROUTEDOC_PRINT_OPENAPI_ON_STARTUP"] = "false"
os.environ["ROUTEDOC_SERVE_DOCS"] = "true"

import json  # noqa: E402
from typing import Any, Dict, Iterable, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from routedoc.core import RequestContext, aggregate  # noqa: E402
from routedoc.routes import api  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Session-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def api_tree():
    return api()


@pytest.fixture(scope="session")
def api_document(api_tree):
    return aggregate(api_tree, title="Swagger Petstore", version="1.0.0")


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_request():
    """
    Builds a RequestContext for dispatching without a server.

    Usage:
        ctx = make_request("GET", "/pet/42")
        ctx = make_request("POST", "/store/order", json_body={"id": 1})
    """

    def _make(
        method: str,
        path: str,
        query: Iterable[Tuple[str, str]] = (),
        headers: Optional[Dict[str, str]] = None,
        json_body: Any = None,
        body: bytes = b"",
    ) -> RequestContext:
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
        return RequestContext.build(
            method=method,
            path=path,
            query=query,
            headers=(headers or {}).items(),
            body=body,
        )

    return _make


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient configured to talk to a freshly created app.

    Usage:
        async def test_get_pet(test_client):
            response = await test_client.get("/pet/42")
            assert response.status_code == 200
    """
    from routedoc.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
