"""REPL for the Folio console."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from console.config import settings
from console.services.api_client import ApiClient
from console.services.project_catalog import ProjectCatalog
from console.services.project_outline import ProjectOutline
from console.services.records_board import CareersBoard, CertificationsBoard, RecordList
from console.services.skill_board import SkillBoard
from folio_cli import render
from folio_cli.config import Config

logger = logging.getLogger(__name__)

CREDENTIAL_FIELDS = ("name", "date", "organization", "tier")
CAREER_FIELDS = ("company", "start_date", "end_date", "department", "position")

HELP = """
  REPL Commands:
    /skills                          - Show skills by category
    /skill-add <category|-> <name>   - Add a skill at the end of a category (- = none)
    /skill-edit <id> <name>          - Rename a skill
    /skill-cat <id> <category|->     - Move a skill to the end of another category
    /skill-move <id> <position>      - Move a skill within its category
    /skill-rm <id>                   - Delete a skill
    /category-add <name>             - Add a category
    /category-edit <id> <name>       - Rename a category
    /category-move <id> <position>   - Move a category
    /category-rm <id>                - Delete a category (its skills become uncategorized)
    /projects [page]                 - List projects
    /project <n|id>                  - Open a project's outline
    /project-add <title>             - Add a project at the end of the list
    /outline                         - Show the open project's outline
    /content-add [@parent] <text>    - Add a block at the end of its level (top level without @)
    /content-edit <id> <text>        - Change a block's text
    /content-move <id> <position>    - Move a block among its siblings
    /content-rm <id>                 - Delete a block and everything under it
    /certs                           - Show certifications and awards
    /cert-add name=.. date=.. [organization=..] [tier=..]
    /cert-edit <id> field=value ...  - Change fields of a certification (- clears)
    /cert-move <id> <position>       - Move a certification
    /cert-rm <id>                    - Delete a certification
    /award-add, /award-edit, /award-move, /award-rm         - The same for awards
    /careers                         - Show businesses and career projects
    /business-add company=.. start_date=.. [end_date=..] [department=..] [position=..]
    /business-edit <id> field=value ... - Change fields of a business (- clears)
    /business-move <id> <position>   - Move a business
    /business-rm <id>                - Delete a business
    /career-add, /career-edit, /career-move, /career-rm     - The same for career projects
    /help                            - Show this help
    /quit                            - Exit REPL

  Positions start at 1. Ids may be shortened to any unique prefix.
  Field values run to the next field: /cert-add name=AWS Solutions Architect date=23.05.
"""


class Usage(Exception):
    """Bad command arguments; the message is the usage line."""

    pass


class Repl:
    """Interactive REPL over the admin API."""

    def __init__(self, config: Config, project_id: str | None = None, api: ApiClient | None = None):
        self.config = config
        self.loop = asyncio.new_event_loop()
        self.api = api or ApiClient(config.api_url, config.token or settings.API_TOKEN)
        self.skills = SkillBoard(self.api)
        self.catalog = ProjectCatalog(self.api)
        self.careers = CareersBoard(self.api)
        self.certs = CertificationsBoard(self.api)
        self.outline: ProjectOutline | None = None
        # command prefix -> (record list, editable fields, fields required on add)
        self.record_kinds: dict[str, tuple[RecordList, tuple[str, ...], tuple[str, ...]]] = {
            "cert": (self.certs.certifications, CREDENTIAL_FIELDS, ("name", "date")),
            "award": (self.certs.awards, CREDENTIAL_FIELDS, ("name", "date")),
            "business": (self.careers.businesses, CAREER_FIELDS, ("company", "start_date")),
            "career": (self.careers.projects, CAREER_FIELDS, ("company", "start_date")),
        }
        self.start_project_id = project_id or config.default_project_id
        self.running = True

        self.commands: dict[str, Callable[[list[str]], None]] = {
            "/skills": self._show_skills,
            "/skill-add": self._skill_add,
            "/skill-edit": self._skill_edit,
            "/skill-cat": self._skill_cat,
            "/skill-move": self._skill_move,
            "/skill-rm": self._skill_rm,
            "/category-add": self._category_add,
            "/category-edit": self._category_edit,
            "/category-move": self._category_move,
            "/category-rm": self._category_rm,
            "/projects": self._show_projects,
            "/project": self._open_project,
            "/project-add": self._project_add,
            "/outline": self._show_outline,
            "/content-add": self._content_add,
            "/content-edit": self._content_edit,
            "/content-move": self._content_move,
            "/content-rm": self._content_rm,
            "/certs": self._show_certs,
            "/careers": self._show_careers,
            "/help": lambda args: print(HELP),
            "/quit": self._quit,
        }
        for kind in self.record_kinds:
            self.commands[f"/{kind}-add"] = functools.partial(self._record_add, kind)
            self.commands[f"/{kind}-edit"] = functools.partial(self._record_edit, kind)
            self.commands[f"/{kind}-move"] = functools.partial(self._record_move, kind)
            self.commands[f"/{kind}-rm"] = functools.partial(self._record_rm, kind)

    def run(self, coro: Coroutine[Any, Any, Any]) -> Any:
        """Drive one board coroutine to completion on the REPL's event loop."""
        return self.loop.run_until_complete(coro)

    def start(self):
        """Start the REPL."""
        print(f"folio > {self.config.api_url}")
        if self.start_project_id:
            self._open_project([self.start_project_id])

        while self.running:
            try:
                line = input("folio > ").strip()
                if not line:
                    continue
                if line.startswith("/"):
                    self.handle(line)
                else:
                    print("  Commands start with /. Type /help for the list.")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            except Exception as e:
                logger.exception("repl: command failed")
                print(f"Error: {e}")

        self.close()

    def close(self):
        self.run(self.api.aclose())
        self.loop.close()

    def handle(self, line: str):
        """Dispatch one slash command."""
        parts = line.split()
        cmd, args = parts[0].lower(), parts[1:]
        action = self.commands.get(cmd)
        if action is None:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")
            return
        try:
            action(args)
        except Usage as e:
            print(f"  Usage: {e}")

    def _quit(self, args: list[str]):
        self.running = False
        print("Goodbye.")

    # -- skills ------------------------------------------------------------

    def _skills_loaded(self) -> bool:
        if not self.skills.skills.loaded or not self.skills.categories.loaded:
            self.run(self.skills.load())
        return self._report(self.skills.error, self.skills.clear_errors)

    def _show_skills(self, args: list[str]):
        if self._skills_loaded():
            print(render.render_skills(self.skills.groups(), self.skills.sorted_categories()))

    def _after_skills(self):
        if self._report(self.skills.error, self.skills.clear_errors):
            print(render.render_skills(self.skills.groups(), self.skills.sorted_categories()))

    def _skill_add(self, args: list[str]):
        if len(args) < 2:
            raise Usage("/skill-add <category|-> <name>")
        if not self._skills_loaded():
            return
        category_id = None
        if args[0] != "-":
            category = self.skills.categories.require(args[0])
            if category is None:
                self._after_skills()
                return
            category_id = category.id
        self.run(self.skills.add_skill(category_id, " ".join(args[1:])))
        self._after_skills()

    def _skill_edit(self, args: list[str]):
        if len(args) < 2:
            raise Usage("/skill-edit <id> <name>")
        if self._skills_loaded():
            self.run(self.skills.rename_skill(args[0], " ".join(args[1:])))
            self._after_skills()

    def _skill_cat(self, args: list[str]):
        if len(args) != 2:
            raise Usage("/skill-cat <id> <category|->")
        if not self._skills_loaded():
            return
        category_id = None
        if args[1] != "-":
            category = self.skills.categories.require(args[1])
            if category is None:
                self._after_skills()
                return
            category_id = category.id
        self.run(self.skills.set_skill_category(args[0], category_id))
        self._after_skills()

    def _skill_move(self, args: list[str]):
        entity_id, position = _move_args("/skill-move", args)
        if self._skills_loaded():
            self.run(self.skills.move_skill(entity_id, position))
            self._after_skills()

    def _skill_rm(self, args: list[str]):
        if len(args) != 1:
            raise Usage("/skill-rm <id>")
        if self._skills_loaded():
            self.run(self.skills.delete_skill(args[0]))
            self._after_skills()

    def _category_add(self, args: list[str]):
        if not args:
            raise Usage("/category-add <name>")
        if self._skills_loaded():
            self.run(self.skills.add_category(" ".join(args)))
            self._after_skills()

    def _category_edit(self, args: list[str]):
        if len(args) < 2:
            raise Usage("/category-edit <id> <name>")
        if self._skills_loaded():
            self.run(self.skills.rename_category(args[0], " ".join(args[1:])))
            self._after_skills()

    def _category_move(self, args: list[str]):
        entity_id, position = _move_args("/category-move", args)
        if self._skills_loaded():
            self.run(self.skills.move_category(entity_id, position))
            self._after_skills()

    def _category_rm(self, args: list[str]):
        if len(args) != 1:
            raise Usage("/category-rm <id>")
        if self._skills_loaded():
            self.run(self.skills.delete_category(args[0]))
            self._after_skills()

    # -- projects ----------------------------------------------------------

    def _show_projects(self, args: list[str]):
        page = 0
        if args:
            if not args[0].isdigit() or int(args[0]) < 1:
                raise Usage("/projects [page]")
            page = int(args[0]) - 1
        self.run(self.catalog.load(page))
        if self._report(self.catalog.error, self._clear_catalog_error):
            print(render.render_projects(self.catalog.page))

    def _open_project(self, args: list[str]):
        if len(args) != 1:
            raise Usage("/project <n|id>")
        token = args[0]
        if self.catalog.page is None and token.isdigit():
            self.run(self.catalog.load())
        item = self.catalog.resolve(token)
        project_id, title = (item.id, item.title) if item else (token, "")
        if item is None:
            detail = self.run(self.catalog.detail(token))
            if not self._report(self.catalog.error, self._clear_catalog_error) or detail is None:
                return
            project_id, title = detail.id, detail.title

        self.outline = ProjectOutline(self.api, project_id, title=title)
        self.run(self.outline.load())
        if self._report(self.outline.error, self.outline.contents.clear_error):
            self.config.default_project_id = project_id
            print(render.render_forest(self.outline.forest(), title=self.outline.title))

    def _project_add(self, args: list[str]):
        if not args:
            raise Usage("/project-add <title>")
        if self.catalog.page is None:
            self.run(self.catalog.load())
        self.run(self.catalog.create(" ".join(args)))
        if self._report(self.catalog.error, self._clear_catalog_error):
            print(render.render_projects(self.catalog.page))

    def _clear_catalog_error(self):
        self.catalog.error = None

    # -- outline -----------------------------------------------------------

    def _outline_open(self) -> ProjectOutline | None:
        if self.outline is None:
            print("  No project open. Use /project <n|id>.")
        return self.outline

    def _after_outline(self, outline: ProjectOutline):
        if self._report(outline.error, outline.contents.clear_error):
            print(render.render_forest(outline.forest(), title=outline.title))

    def _show_outline(self, args: list[str]):
        outline = self._outline_open()
        if outline is not None:
            self._after_outline(outline)

    def _content_add(self, args: list[str]):
        parent_id = None
        if args and args[0].startswith("@"):
            parent_id, args = args[0][1:], args[1:]
        if not args or parent_id == "":
            raise Usage("/content-add [@parent] <text>")
        outline = self._outline_open()
        if outline is None:
            return
        self.run(outline.add(parent_id, " ".join(args)))
        self._after_outline(outline)

    def _content_edit(self, args: list[str]):
        if len(args) < 2:
            raise Usage("/content-edit <id> <text>")
        outline = self._outline_open()
        if outline is not None:
            self.run(outline.edit(args[0], " ".join(args[1:])))
            self._after_outline(outline)

    def _content_move(self, args: list[str]):
        entity_id, position = _move_args("/content-move", args)
        outline = self._outline_open()
        if outline is not None:
            self.run(outline.move(entity_id, position))
            self._after_outline(outline)

    def _content_rm(self, args: list[str]):
        if len(args) != 1:
            raise Usage("/content-rm <id>")
        outline = self._outline_open()
        if outline is not None:
            self.run(outline.delete(args[0]))
            self._after_outline(outline)

    # -- careers and certifications ----------------------------------------

    def _show_certs(self, args: list[str]):
        self.run(self.certs.load())
        self._print_certs()

    def _print_certs(self):
        if self._report(self.certs.error, self.certs.clear_errors):
            print(render.render_records("Certifications", self.certs.certifications.items(), render.describe_credential))
            print(render.render_records("Awards", self.certs.awards.items(), render.describe_credential))

    def _show_careers(self, args: list[str]):
        self.run(self.careers.load())
        self._print_careers()

    def _print_careers(self):
        if self._report(self.careers.error, self.careers.clear_errors):
            print(render.render_records("Businesses", self.careers.businesses.items(), render.describe_career))
            print(render.render_records("Career projects", self.careers.projects.items(), render.describe_career))

    def _records_loaded(self, records: RecordList) -> bool:
        board = self.certs if records in self.certs.lists else self.careers
        if not records.state.loaded:
            self.run(board.load())
        return self._report(board.error, board.clear_errors)

    def _after_records(self, records: RecordList):
        if records in self.certs.lists:
            self._print_certs()
        else:
            self._print_careers()

    def _record_add(self, kind: str, args: list[str]):
        records, allowed, required = self.record_kinds[kind]
        usage = f"/{kind}-add " + " ".join(
            f"{name}=.." if name in required else f"[{name}=..]" for name in allowed
        )
        fields = _field_args(usage, args, allowed)
        if any(not fields.get(name) for name in required):
            raise Usage(usage)
        if self._records_loaded(records):
            self.run(records.create(fields))
            self._after_records(records)

    def _record_edit(self, kind: str, args: list[str]):
        records, allowed, _ = self.record_kinds[kind]
        usage = f"/{kind}-edit <id> field=value ... (fields: {', '.join(allowed)})"
        if len(args) < 2:
            raise Usage(usage)
        fields = _field_args(usage, args[1:], allowed)
        if self._records_loaded(records):
            self.run(records.update(args[0], fields))
            self._after_records(records)

    def _record_move(self, kind: str, args: list[str]):
        records = self.record_kinds[kind][0]
        entity_id, position = _move_args(f"/{kind}-move", args)
        if self._records_loaded(records):
            self.run(records.move(entity_id, position))
            self._after_records(records)

    def _record_rm(self, kind: str, args: list[str]):
        records = self.record_kinds[kind][0]
        if len(args) != 1:
            raise Usage(f"/{kind}-rm <id>")
        if self._records_loaded(records):
            self.run(records.delete(args[0]))
            self._after_records(records)

    # -- helpers -----------------------------------------------------------

    def _report(self, error: str | None, clear: Callable[[], None]) -> bool:
        """Print and clear a board error. True when there was none."""
        if error:
            print(f"  {error}")
            clear()
            return False
        return True


def _move_args(usage: str, args: list[str]) -> tuple[str, int]:
    """<id> <position> with a 1-based position → (id, 0-based index)."""
    if len(args) != 2 or not args[1].isdigit() or int(args[1]) < 1:
        raise Usage(f"{usage} <id> <position>")
    return args[0], int(args[1]) - 1


def _field_args(usage: str, args: list[str], allowed: tuple[str, ...]) -> dict[str, str | None]:
    """
    `name=AWS SAA date=23.05.` → {"name": "AWS SAA", "date": "23.05."}.

    A word starts a new field only when it is `<allowed name>=`; any other
    word continues the current value. `-` or an empty value clears the field.
    """
    fields: dict[str, str] = {}
    current = None
    for word in args:
        name, sep, value = word.partition("=")
        if sep and name in allowed:
            current = name
            fields[current] = value
        elif current is None:
            raise Usage(usage)
        else:
            fields[current] = f"{fields[current]} {word}".strip()
    if not fields:
        raise Usage(usage)
    return {name: None if value in ("", "-") else value for name, value in fields.items()}
