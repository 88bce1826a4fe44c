"""Careers and certifications boards: flat ordered lists."""

from __future__ import annotations

import pytest
import pytest_asyncio

from console.services.records_board import CareersBoard, CertificationsBoard

pytestmark = pytest.mark.asyncio


def item_ids(records):
    return [record.id for record in records.items()]


@pytest_asyncio.fixture
async def certs(api):
    board = CertificationsBoard(api, timeout=1.0)
    assert await board.load()
    return board


@pytest_asyncio.fixture
async def careers(api):
    board = CareersBoard(api, timeout=1.0)
    assert await board.load()
    return board


class TestCertifications:
    async def test_load_both_kinds(self, certs):
        assert item_ids(certs.certifications) == ["cert0", "cert1", "cert2"]
        assert item_ids(certs.awards) == ["hack"]

    async def test_move_writes_order_index(self, certs, backend):
        report = await certs.certifications.move("cert2", 0)
        assert report.ok
        assert item_ids(certs.certifications) == ["cert2", "cert0", "cert1"]
        puts = dict(backend.writes_to("PUT"))
        assert puts["/api/certifications/certifications/cert2"] == {
            "name": "OCP",
            "date": "23.05.",
            "orderIndex": 0,
        }
        assert len(puts) == 3

    async def test_drag(self, certs):
        await certs.certifications.reorder("cert0", "cert1")
        assert item_ids(certs.certifications) == ["cert1", "cert0", "cert2"]

    async def test_failure_sets_board_error(self, certs, backend):
        backend.fail.add(("PUT", "/api/certifications/certifications/cert0"))
        await certs.certifications.move("cert0", 2)
        assert certs.error == "Failed to change the order."
        certs.clear_errors()
        assert certs.error is None

    async def test_create_appends_with_next_order_index(self, certs, backend):
        created = await certs.certifications.create({"name": "CKAD", "date": "24.02.", "organization": "CNCF"})
        assert created is not None
        assert item_ids(certs.certifications)[-1] == created.id
        assert backend.writes_to("POST") == [
            (
                "/api/certifications/certifications",
                {"name": "CKAD", "date": "24.02.", "organization": "CNCF", "orderIndex": 3},
            )
        ]

    async def test_create_award_in_empty_list(self, certs, backend):
        await certs.awards.delete("hack")
        created = await certs.awards.create({"name": "Best Demo", "date": "24.06."})
        assert backend.awards[created.id]["orderIndex"] == 0

    async def test_update_is_full_replace(self, certs, backend):
        report = await certs.certifications.update("cert1", {"organization": "CNCF"})
        assert report.ok
        assert backend.writes_to("PUT") == [
            (
                "/api/certifications/certifications/cert1",
                {"name": "CKA", "date": "23.05.", "organization": "CNCF", "orderIndex": 1},
            )
        ]
        assert certs.certifications.state.get("cert1").payload["organization"] == "CNCF"

    async def test_update_unknown_id(self, certs, backend):
        assert await certs.certifications.update("nope", {"name": "X"}) is None
        assert certs.error == "Nothing in certifications matches 'nope'."
        assert backend.writes == []

    async def test_delete(self, certs, backend):
        await certs.awards.delete("hack")
        assert item_ids(certs.awards) == []
        assert backend.awards == {}


class TestCareers:
    async def test_move_business(self, careers, backend):
        await careers.businesses.move("initech", 0)
        assert item_ids(careers.businesses) == ["initech", "acme"]
        assert backend.businesses["acme"]["orderIndex"] == 1
        assert backend.businesses["initech"]["startDate"] == "2022-03-01"

    async def test_update_clears_field(self, careers, backend):
        await careers.businesses.update("acme", {"position": "Engineer"})
        assert backend.businesses["acme"]["position"] == "Engineer"
        await careers.businesses.update("acme", {"position": None})
        assert "position" not in backend.businesses["acme"]
        assert backend.businesses["acme"]["company"] == "Acme"

    async def test_career_projects_separate(self, careers):
        assert item_ids(careers.projects) == ["billing"]
        report = await careers.projects.move("billing", 3)
        assert report.changed == ()
