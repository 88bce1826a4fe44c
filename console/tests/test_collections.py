"""
Remote collection tests.

Tests verify:
  - wire rows become OrderedEntity with parent/order lifted out
  - updates send full camelCase bodies with the parent and order fields
  - per-kind wiring (list keys, item paths, orderIndex, projectId)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from console.services import collections
from console.services.api_client import ApiClient, NotFoundError
from engine.hierarchy.types import OrderedEntity


@pytest.fixture
def offline_api():
    return ApiClient(api_url="http://test", token="t")


class TestConversion:
    def test_to_entity_lifts_structural_fields(self, offline_api):
        skills = collections.skills(offline_api)
        entity = skills.to_entity({"id": "go", "name": "Go", "categoryId": "lang", "order": 3})
        assert entity == OrderedEntity(id="go", parent_key="lang", order=3, payload={"name": "Go"})

    def test_missing_order_reads_as_zero(self, offline_api):
        entity = collections.categories(offline_api).to_entity({"id": "c", "name": "C"})
        assert entity.order == 0
        assert entity.parent_key is None

    def test_to_request_uses_wire_names(self, offline_api):
        body = collections.skills(offline_api).to_request({"name": "Go", "parent_key": "lang", "order": 2})
        assert body == {"name": "Go", "categoryId": "lang", "order": 2}

    def test_order_index_field(self, offline_api):
        certs = collections.certifications(offline_api)
        entity = certs.to_entity({"id": "c1", "name": "CKA", "date": "23.01.", "orderIndex": 4})
        assert entity.order == 4
        assert certs.to_request(entity.as_payload()) == {"name": "CKA", "date": "23.01.", "orderIndex": 4}

    def test_project_id_merged_into_content_body(self, offline_api):
        contents = collections.project_contents(offline_api, "p1")
        body = contents.to_request({"content": "Hi", "parent_key": None, "order": 0})
        assert body == {"projectId": "p1", "content": "Hi", "order": 0}

    def test_request_is_validated(self, offline_api):
        with pytest.raises(ValidationError):
            collections.skills(offline_api).to_request({"name": "", "parent_key": None, "order": 0})


@pytest.mark.asyncio
class TestRemoteCalls:
    async def test_list_skills(self, api):
        skills = await collections.skills(api).list()
        by_id = {s.id: s for s in skills}
        assert len(skills) == 6
        assert by_id["pg"].parent_key == "db"
        assert by_id["vim"].parent_key is None
        assert by_id["go"].payload == {"name": "Go"}

    async def test_list_contents_from_project_detail(self, api):
        contents = await collections.project_contents(api, "p1").list()
        by_id = {c.id: c for c in contents}
        assert len(contents) == 6
        assert by_id["api"].parent_key == "backend"
        assert by_id["intro"].payload["content"] == "Introduction"

    async def test_list_careers_splits_kinds(self, api):
        businesses = await collections.businesses(api).list()
        projects = await collections.career_projects(api).list()
        assert [b.id for b in businesses] == ["acme", "initech"]
        assert [p.id for p in projects] == ["billing"]
        assert businesses[1].payload["company"] == "Initech"

    async def test_update_sends_full_body(self, api, backend):
        skills = collections.skills(api)
        go = OrderedEntity(id="go", parent_key="lang", order=0, payload={"name": "Go"})
        updated = await skills.update("go", go.as_payload())

        assert updated == go
        assert backend.writes_to("PUT") == [
            ("/api/skills/go", {"name": "Go", "categoryId": "lang", "order": 0})
        ]

    async def test_create_returns_server_entity(self, api, backend):
        created = await collections.awards(api).create(
            {"name": "Best Talk", "date": "24.02.", "parent_key": None, "order": 1}
        )
        assert created.id in backend.awards
        assert created.order == 1
        assert backend.awards[created.id]["orderIndex"] == 1

    async def test_delete_missing(self, api):
        with pytest.raises(NotFoundError):
            await collections.skills(api).delete("nope")
