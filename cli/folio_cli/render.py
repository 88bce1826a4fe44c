"""
Text rendering for the console.

Pure functions from derived structures (sibling groups, forests, record
lists, project pages) to printable text. Rows are numbered from 1; that
number is the position the *-move commands take.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from console.models.projects import ProjectList
from engine.hierarchy.tree import Forest
from engine.hierarchy.types import UNCATEGORIZED, OrderedEntity, StructuralError

ID_WIDTH = 8


def short_id(entity_id: str) -> str:
    return entity_id[:ID_WIDTH]


def _row(index: int, text: str, entity_id: str, indent: str = "  ") -> str:
    return f"{indent}{index}. {text}  [{short_id(entity_id)}]"


def render_skills(
    groups: Mapping[str, Sequence[OrderedEntity]],
    categories: Sequence[OrderedEntity],
) -> str:
    """Skills under their category headings; the uncategorized group last."""
    names = {category.id: category.payload.get("name", category.id) for category in categories}
    lines: list[str] = []
    for position, (key, members) in enumerate(groups.items(), 1):
        if key == UNCATEGORIZED:
            if not members:
                continue
            lines.append("Uncategorized")
        else:
            lines.append(_row(position, names.get(key, key), key, indent=""))
        if not members:
            lines.append("    (empty)")
        for index, skill in enumerate(members, 1):
            lines.append(_row(index, skill.payload.get("name", ""), skill.id, indent="    "))
    return "\n".join(lines) if lines else "No skills yet."


def render_forest(forest: Forest, title: str = "") -> str:
    """Outline with two spaces of indent per level."""
    lines = [title] if title else []
    try:
        for depth, node in forest.walk():
            text = node.payload.get("content", "")
            lines.append(f"{'  ' * (depth + 1)}- {text}  [{short_id(node.id)}]")
    except StructuralError as e:
        lines.append(f"  (outline is broken: {e})")
    if not forest.roots:
        lines.append("  (no content)")
    hidden = len(forest.orphans) + len(forest.detached)
    if hidden:
        lines.append(f"  ({hidden} block(s) not attached to the outline)")
    return "\n".join(lines)


def describe_career(record: OrderedEntity) -> str:
    p = record.payload
    period = f"{p.get('start_date', '')} ~ {p.get('end_date') or 'present'}"
    role = p.get("position")
    return f"{p.get('company', '')} ({role})  {period}" if role else f"{p.get('company', '')}  {period}"


def describe_credential(record: OrderedEntity) -> str:
    p = record.payload
    return " / ".join(str(part) for part in (p.get("name"), p.get("organization"), p.get("date")) if part)


def render_records(
    title: str,
    records: Sequence[OrderedEntity],
    describe: Callable[[OrderedEntity], str],
) -> str:
    lines = [title]
    if not records:
        lines.append("  (none)")
    for index, record in enumerate(records, 1):
        lines.append(_row(index, describe(record), record.id))
    return "\n".join(lines)


def render_projects(page: ProjectList | None) -> str:
    if page is None:
        return "Projects not loaded."
    lines = [f"Projects (page {page.number + 1}/{max(page.total_pages, 1)}, {page.total_elements} total)"]
    if not page.items:
        lines.append("  (none)")
    for index, project in enumerate(page.items, 1):
        lines.append(_row(index, project.title, project.id))
    return "\n".join(lines)
