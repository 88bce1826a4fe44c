"""Main entry point for the Folio console."""

from __future__ import annotations

import logging
import sys

from console.config import settings
from folio_cli import __version__
from folio_cli.config import DEFAULT_API_URL, Config
from folio_cli.repl import Repl


def print_help():
    """Print help message."""
    print(f"""
Folio console v{__version__}

Usage:
  folio [options] [command]

Commands:
  token <value>     Store an API token for the current API URL
  logout            Forget the token for the current API URL

Options:
  --api-url URL     Override API endpoint (default: {DEFAULT_API_URL})
  --project ID      Start REPL with a project's outline open
  --all             With logout: forget every environment
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  FOLIO_API_URL     Override API endpoint (same as --api-url)
  FOLIO_API_TOKEN   Token to use when none is stored
  FOLIO_LOG_LEVEL   Log level (default WARNING)

Examples:
  folio token abc123                                # Store a token
  folio token abc123 --api-url http://localhost:8080
  folio --project 42                                # Open project 42
  folio logout --all                                # Forget all environments

Type /help inside the REPL for its commands.
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (token, logout, None for REPL)
        token: str | None
        api_url: str | None
        project_id: str | None
        logout_all: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "token": None,
        "api_url": None,
        "project_id": None,
        "logout_all": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "token":
            result["command"] = "token"
            if i + 1 < len(args) and not args[i + 1].startswith("-"):
                result["token"] = args[i + 1]
                i += 1
            else:
                print("Error: token requires a value")
                sys.exit(1)
        elif arg == "logout":
            result["command"] = "logout"
        elif arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg == "--project":
            if i + 1 < len(args):
                result["project_id"] = args[i + 1]
                i += 1
            else:
                print("Error: --project requires an ID")
                sys.exit(1)
        elif arg == "--all":
            result["logout_all"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'folio --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown command: {arg}")
            print("Run 'folio --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"folio {__version__}")
        return

    configure_logging()
    config = Config(api_url_override=args["api_url"])

    if args["command"] == "token":
        config.token = args["token"]
        config.default_url = config.api_url
        print(f"Token stored for {config.api_url}")
        return

    if args["command"] == "logout":
        if args["logout_all"]:
            config.clear_all()
            print("Logged out of all environments.")
        else:
            config.clear_environment()
            print(f"Logged out of {config.api_url}")
        return

    if not config.is_authenticated and not settings.API_TOKEN:
        print(f"No token for {config.api_url}")
        print("Run 'folio token <value>' or set FOLIO_API_TOKEN.")
        sys.exit(1)

    Repl(config, project_id=args["project_id"]).start()


if __name__ == "__main__":
    main()
