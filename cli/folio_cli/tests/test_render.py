"""Tests for console text rendering."""

from __future__ import annotations

from console.models.projects import ProjectList
from engine.hierarchy.grouping import group_siblings
from engine.hierarchy.tests.helpers import entity
from engine.hierarchy.tree import assemble
from folio_cli import render


class TestSkills:
    def test_categories_then_uncategorized(self):
        categories = [entity("lang", None, 0, name="Languages"), entity("db", None, 1, name="Databases")]
        skills = [
            entity("go", "lang", 1, name="Go"),
            entity("python", "lang", 0, name="Python"),
            entity("vim", None, 0, name="Vim"),
        ]
        text = render.render_skills(group_siblings(skills, ["lang", "db"]), categories)
        assert text.splitlines() == [
            "1. Languages  [lang]",
            "    1. Python  [python]",
            "    2. Go  [go]",
            "2. Databases  [db]",
            "    (empty)",
            "Uncategorized",
            "    1. Vim  [vim]",
        ]

    def test_empty_uncategorized_hidden(self):
        categories = [entity("lang", None, 0, name="Languages")]
        text = render.render_skills(group_siblings([], ["lang"]), categories)
        assert "Uncategorized" not in text

    def test_nothing(self):
        assert render.render_skills(group_siblings([], []), []) == "No skills yet."

    def test_long_ids_shortened(self):
        skills = [entity("0123456789abcdef", None, 0, name="Vim")]
        assert "[01234567]" in render.render_skills(group_siblings(skills, []), [])


class TestForest:
    def test_indented_outline(self):
        nodes = [
            entity("b", None, 1, content="Stack"),
            entity("a", None, 0, content="Intro"),
            entity("c", "b", 0, content="Backend"),
        ]
        text = render.render_forest(assemble(nodes), title="Portfolio")
        assert text.splitlines() == [
            "Portfolio",
            "  - Intro  [a]",
            "  - Stack  [b]",
            "    - Backend  [c]",
        ]

    def test_hidden_blocks_counted(self):
        nodes = [
            entity("a", None, 0, content="Intro"),
            entity("lost", "ghost", 0, content="?"),
            entity("x", "y", 0, content="x"),
            entity("y", "x", 0, content="y"),
        ]
        text = render.render_forest(assemble(nodes))
        assert "(3 block(s) not attached to the outline)" in text
        assert "?" not in text

    def test_empty(self):
        assert "(no content)" in render.render_forest(assemble([]))


class TestRecords:
    def test_credentials(self):
        records = [entity("c1", None, 0, name="CKA", organization="CNCF", date="23.05.")]
        text = render.render_records("Certifications", records, render.describe_credential)
        assert text.splitlines() == ["Certifications", "  1. CKA / CNCF / 23.05.  [c1]"]

    def test_careers(self):
        records = [
            entity("acme", None, 0, company="Acme", start_date="2020-01-01", position="Engineer"),
            entity("ini", None, 1, company="Initech", start_date="2022-03-01", end_date="2023-01-01"),
        ]
        lines = render.render_records("Businesses", records, render.describe_career).splitlines()
        assert lines[1] == "  1. Acme (Engineer)  2020-01-01 ~ present  [acme]"
        assert lines[2] == "  2. Initech  2022-03-01 ~ 2023-01-01  [ini]"

    def test_none(self):
        assert render.render_records("Awards", [], render.describe_credential).endswith("(none)")


class TestProjects:
    def test_page(self):
        page = ProjectList.model_validate(
            {
                "items": [{"id": "p1", "title": "Portfolio"}],
                "totalPages": 2,
                "totalElements": 11,
                "number": 1,
            }
        )
        assert render.render_projects(page).splitlines() == [
            "Projects (page 2/2, 11 total)",
            "  1. Portfolio  [p1]",
        ]

    def test_not_loaded(self):
        assert render.render_projects(None) == "Projects not loaded."
