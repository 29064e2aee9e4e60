"""Command-line front end for the start-page state.

Useful for scripting backups and migrations and for inspecting what a browser
profile has stored. Every command loads the persisted state first and saves
through the same use cases a graphical front end would call.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..domain.errors import StoreError, UseCaseError, storage_error_message
from ..utils.logging import apply_verbosity, configure_root
from ..viewmodels.dashboard_vm import DashboardVM
from .config import AppConfig
from .controller import AppController

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNSAVED = 2

log = logging.getLogger(__name__)


def _parse_value(text: str) -> Any:
    """JSON-decode ``text`` when possible so ``cols=6`` sets an int."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _parse_assignments(pairs: Sequence[str]) -> Dict[str, Any]:
    updates: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise UseCaseError("BAD_ARGUMENT", f"Expected KEY=VALUE, got '{pair}'.")
        updates[key.strip()] = _parse_value(value)
    return updates


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UseCaseError("READ_FAILED", f"Could not read {path}: {exc}") from exc


def _print_dashboard(ctl: AppController) -> None:
    vm = DashboardVM(ctl)
    settings = ctl.state.settings
    print(f"theme={settings.theme} cols={settings.cols} search={settings.search_provider}")
    for tab in vm.tabs():
        marker = "*" if tab.active else " "
        print(f"{marker} [{tab.id}] {tab.name}")
    for tile in vm.tiles():
        print(f"    {tile.position:>2}  {tile.title:<24} {tile.url}  ({tile.id})")


def _print_weather(ctl: AppController) -> None:
    unit = "°F" if ctl.state.settings.weather_unit == "imperial" else "°C"
    reports = ctl.build_fetch_weather()()
    if not reports:
        print("weather widget is off")
    for report in reports:
        if report.observation is None:
            print(f"{report.city.location}: error ({report.error})")
            continue
        obs = report.observation
        print(
            f"{report.city.location}: {round(obs.temperature)}{unit}, "
            f"humidity {round(obs.humidity_pct)}%, wind {round(obs.wind_speed)}, "
            f"{'day' if obs.is_day else 'night'}"
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="speeddial", description="Manage start-page tiles, pages and settings.")
    parser.add_argument("--data-dir", help="Directory holding the stored state.")
    parser.add_argument("--quota-bytes", type=int, help="Storage cap in bytes (0 disables).")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print pages and the active page's tiles.")

    p = sub.add_parser("add-tile", help="Add a shortcut to a page.")
    p.add_argument("url")
    p.add_argument("--title")
    p.add_argument("--image")
    p.add_argument("--page", help="Page id (defaults to the active page).")

    p = sub.add_parser("edit-tile", help="Change tile fields (title, url, imageUrl, pageId).")
    p.add_argument("tile_id")
    p.add_argument("fields", nargs="+", metavar="KEY=VALUE")

    p = sub.add_parser("remove-tile")
    p.add_argument("tile_id")

    p = sub.add_parser("move-tile", help="Move a tile within a page by grid index.")
    p.add_argument("old_index", type=int)
    p.add_argument("new_index", type=int)
    p.add_argument("--page", help="Page id (defaults to the active page).")

    p = sub.add_parser("add-page")
    p.add_argument("name", nargs="?")

    p = sub.add_parser("rename-page")
    p.add_argument("page_id")
    p.add_argument("name")

    p = sub.add_parser("remove-page")
    p.add_argument("page_id")

    p = sub.add_parser("select-page")
    p.add_argument("page_id")

    p = sub.add_parser("move-page")
    p.add_argument("old_index", type=int)
    p.add_argument("new_index", type=int)

    sub.add_parser("sort-pages", help="Sort pages A-Z.")

    p = sub.add_parser("set", help="Update settings, e.g. cols=6 theme=light.")
    p.add_argument("assignments", nargs="+", metavar="KEY=VALUE")

    p = sub.add_parser("export", help="Write a native backup.")
    p.add_argument("path", nargs="?", default="-")

    p = sub.add_parser("import", help="Restore a native backup.")
    p.add_argument("path")

    p = sub.add_parser("import-legacy", help="Migrate a Speed Dial 2 export.")
    p.add_argument("path")

    p = sub.add_parser("reset", help="Erase all stored data.")
    p.add_argument("--yes", action="store_true", help="Confirm the reset.")

    sub.add_parser("weather", help="Fetch current weather for configured locations.")

    p = sub.add_parser("note", help="Print, or replace, the quick note.")
    p.add_argument("text", nargs="?")

    p = sub.add_parser("search", help="Print the search URL for a query.")
    p.add_argument("query", nargs="+")
    return parser


def _dispatch(ctl: AppController, args: argparse.Namespace) -> None:
    state = ctl.state
    cmd = args.command
    if cmd == "show":
        _print_dashboard(ctl)
    elif cmd == "add-tile":
        tile = ctl.create_tile(args.page or state.active_page_id, args.url, args.title, args.image)
        print(tile.id)
    elif cmd == "edit-tile":
        ctl.update_tile(args.tile_id, _parse_assignments(args.fields))
    elif cmd == "remove-tile":
        ctl.delete_tile(args.tile_id)
    elif cmd == "move-tile":
        page_id = args.page or state.active_page_id
        count = state.count_tiles_on(page_id)
        for index in (args.old_index, args.new_index):
            if not 0 <= index < count:
                raise UseCaseError("BAD_ARGUMENT", f"Index {index} is outside 0..{count - 1}.")
        ctl.reorder_tiles(page_id, args.old_index, args.new_index)
    elif cmd == "add-page":
        print(ctl.create_page(args.name).id)
    elif cmd == "rename-page":
        ctl.rename_page(args.page_id, args.name)
    elif cmd == "remove-page":
        ctl.delete_page(args.page_id)
    elif cmd == "select-page":
        ctl.select_page(args.page_id)
    elif cmd == "move-page":
        count = len(state.pages)
        for index in (args.old_index, args.new_index):
            if not 0 <= index < count:
                raise UseCaseError("BAD_ARGUMENT", f"Index {index} is outside 0..{count - 1}.")
        ctl.reorder_pages(args.old_index, args.new_index)
    elif cmd == "sort-pages":
        ctl.sort_pages()
    elif cmd == "set":
        ctl.update_settings(_parse_assignments(args.assignments))
    elif cmd == "export":
        document = ctl.export_backup()
        if args.path == "-":
            print(document)
        else:
            try:
                Path(args.path).write_text(document, encoding="utf-8")
            except OSError as exc:
                raise UseCaseError("WRITE_FAILED", f"Could not write {args.path}: {exc}") from exc
    elif cmd == "import":
        ctl.import_backup(_read_input(args.path))
    elif cmd == "import-legacy":
        ctl.migrate_legacy(_read_input(args.path))
    elif cmd == "reset":
        if not args.yes:
            raise UseCaseError("CONFIRMATION_REQUIRED", "Refusing to reset without --yes.")
        ctl.reset()
    elif cmd == "weather":
        _print_weather(ctl)
    elif cmd == "note":
        if args.text is None:
            print(ctl.load_note())
        else:
            ctl.save_note(args.text)
    elif cmd == "search":
        url = ctl.build_search_url(" ".join(args.query))
        if url:
            print(url)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    configure_root()
    level = apply_verbosity(args.verbose)
    log.debug("Effective log level: %s", logging.getLevelName(level))

    config = AppConfig.from_env().with_overrides(data_dir=args.data_dir)
    if args.quota_bytes is not None:
        config.quota_bytes = args.quota_bytes if args.quota_bytes > 0 else None
    ctl = AppController(config)
    ctl.load()
    try:
        _dispatch(ctl, args)
    except StoreError as err:
        log.debug("Store failure", exc_info=True)
        print(storage_error_message(err), file=sys.stderr)
        return EXIT_UNSAVED
    except UseCaseError as err:
        print(f"error: {err.message}", file=sys.stderr)
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
