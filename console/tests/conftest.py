"""
Console test configuration.

Console tests talk HTTP to the in-memory fake API (console.tests.fake_api)
through httpx.ASGITransport; nothing leaves the process.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from console.services.api_client import ApiClient
from console.tests.fake_api import FakeBackend, create_app


@pytest.fixture
def backend():
    """Fake server seeded with a small portfolio."""
    backend = FakeBackend()

    backend.add("categories", {"id": "lang", "name": "Languages", "order": 0})
    backend.add("categories", {"id": "db", "name": "Databases", "order": 1})

    for i, name in enumerate(["Python", "Go", "Rust", "SQL"]):
        backend.add("skills", {"id": name.lower(), "name": name, "categoryId": "lang", "order": i})
    backend.add("skills", {"id": "pg", "name": "PostgreSQL", "categoryId": "db", "order": 0})
    backend.add("skills", {"id": "vim", "name": "Vim", "categoryId": None, "order": 0})

    backend.add("projects", {"id": "p1", "title": "Portfolio", "order": 0, "skills": ["python"]})
    backend.add("projects", {"id": "p2", "title": "Blog", "order": 1})
    contents = [
        ("intro", None, 0, "Introduction"),
        ("stack", None, 1, "Stack"),
        ("backend", "stack", 0, "Backend"),
        ("frontend", "stack", 1, "Frontend"),
        ("infra", "stack", 2, "Infra"),
        ("api", "backend", 0, "REST API"),
    ]
    for cid, parent, order, text in contents:
        backend.add(
            "contents",
            {"id": cid, "projectId": "p1", "parentId": parent, "order": order, "content": text},
        )

    backend.add(
        "businesses",
        {"id": "acme", "company": "Acme", "startDate": "2020-01-01", "orderIndex": 0},
    )
    backend.add(
        "businesses",
        {"id": "initech", "company": "Initech", "startDate": "2022-03-01", "orderIndex": 1},
    )
    backend.add(
        "career_projects",
        {"id": "billing", "company": "Acme", "startDate": "2020-06-01", "orderIndex": 0},
    )

    for i, name in enumerate(["AWS SAA", "CKA", "OCP"]):
        backend.add(
            "certifications",
            {"id": f"cert{i}", "name": name, "date": "23.05.", "orderIndex": i},
        )
    backend.add("awards", {"id": "hack", "name": "Hackathon", "date": "22.11.", "orderIndex": 0})
    return backend


@pytest_asyncio.fixture
async def http_client(backend):
    """Async HTTP client against the fake API."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=create_app(backend)),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def api(http_client):
    return ApiClient(api_url="http://test", token="test-token", client=http_client)
