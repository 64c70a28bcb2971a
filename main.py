"""Command-line entry point for path hand-off between macOS applications."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from path_handoff.actions import HandoffExecutor, is_application_running
from path_handoff.apps import (
    CLIPBOARD,
    DOCUMENT_APPS,
    DOCUMENT_TARGETS,
    FILE_MANAGERS,
    TERMINALS,
    destinations_for,
    display_name,
    is_document_app,
    is_file_manager,
    parse_identity,
)
from path_handoff.cloud import map_to_local
from path_handoff.config import HandoffConfig
from path_handoff.frontmost import FrontmostAppProvider
from path_handoff.resolver import PathResolver, resolve_open_target
from path_handoff.scripts import build_script

logger = logging.getLogger(__name__)


def _source_or_frontmost(value: Optional[str]) -> str:
    if value:
        return value if value == CLIPBOARD else parse_identity(value)
    frontmost = FrontmostAppProvider().current()
    if frontmost is None or frontmost.identity is None:
        label = frontmost.app_label if frontmost else "Unknown"
        raise ValueError(f"Frontmost application {label} is not a supported source")
    return frontmost.identity


def cmd_list(args: argparse.Namespace) -> int:
    families = (
        ("File managers", FILE_MANAGERS),
        ("Terminals", TERMINALS),
        ("Document applications", DOCUMENT_APPS),
        ("Document targets", DOCUMENT_TARGETS),
    )
    for title, members in families:
        print(f"{title}:")
        for member in members:
            print(f"  {display_name(member)}")
    return 0


def cmd_frontmost(args: argparse.Namespace) -> int:
    provider = FrontmostAppProvider()
    if not provider.is_supported():
        sys.stderr.write("Frontmost application detection is not supported on this platform.\n")
        return 1
    info = provider.current()
    if info is None:
        print("[info] Unable to read frontmost application")
        return 1
    print(f"{info.app_label} ({info.bundle_id or 'no bundle id'})")
    if info.process_path:
        print(f"  path: {info.process_path}")
    print(f"  source: {display_name(info.identity) if info.identity else '(unsupported)'}")
    return 0


def cmd_script(args: argparse.Namespace) -> int:
    print(build_script(parse_identity(args.app)), end="")
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    source = _source_or_frontmost(args.app)
    if source != CLIPBOARD and not is_application_running(source):
        sys.stderr.write(f"{display_name(source)} does not appear to be running.\n")
    resolver = PathResolver()
    if is_document_app(source):
        location = resolver.resolve_document_path(source)
        print(f"Source Path: {location.document_path or '(empty document path)'}")
        print(f"Mapped Local Path: {location.resolved_path or '(no local match)'}")
    elif is_file_manager(source):
        path = resolve_open_target(resolver.resolve_file_manager_path(source))
        print(f"Source Path: {path or '(empty file manager path)'}")
    else:
        print("Source Path: (terminal path unavailable)")
    return 0


def cmd_map_url(args: argparse.Namespace) -> int:
    mapped = map_to_local(args.url, HandoffConfig.from_env())
    if mapped is None:
        print("(no local match)")
        return 1
    print(mapped)
    return 0


def cmd_open_target(args: argparse.Namespace) -> int:
    print(resolve_open_target(args.path))
    return 0


def cmd_handoff(args: argparse.Namespace) -> int:
    source = _source_or_frontmost(args.source)
    target = parse_identity(args.target)
    if target not in destinations_for(source):
        raise ValueError(f"Cannot hand off from {display_name(source)} to {display_name(target)}")
    outcome = HandoffExecutor().hand_off(source, target, text=args.text)
    print(f"{outcome.status}: {outcome.detail}" if outcome.detail else outcome.status)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Open one application's current location in another")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List supported applications")
    list_parser.set_defaults(func=cmd_list)

    frontmost_parser = subparsers.add_parser("frontmost", help="Show the frontmost application")
    frontmost_parser.set_defaults(func=cmd_frontmost)

    script_parser = subparsers.add_parser("script", help="Print the AppleScript used for an application")
    script_parser.add_argument("app")
    script_parser.set_defaults(func=cmd_script)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an application's current path")
    resolve_parser.add_argument("app", nargs="?", help="Defaults to the frontmost application")
    resolve_parser.set_defaults(func=cmd_resolve)

    map_parser = subparsers.add_parser("map-url", help="Map a SharePoint URL to a synced local file")
    map_parser.add_argument("url")
    map_parser.set_defaults(func=cmd_map_url)

    open_parser = subparsers.add_parser("open-target", help="Show the folder that would be opened for a path")
    open_parser.add_argument("path")
    open_parser.set_defaults(func=cmd_open_target)

    handoff_parser = subparsers.add_parser("handoff", help="Open a source's location in a target application")
    handoff_parser.add_argument("target")
    handoff_parser.add_argument("--source", help="Source application or 'Clipboard'; defaults to the frontmost app")
    handoff_parser.add_argument("--text", default="", help="Clipboard text when the source is 'Clipboard'")
    handoff_parser.set_defaults(func=cmd_handoff)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (RuntimeError, ValueError, OSError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
