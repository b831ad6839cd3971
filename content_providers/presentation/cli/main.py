"""CLI entry point for browsing providers and resolving content views."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Dict, Iterable, Optional

from ... import __version__
from ...base.errors import UnknownProviderError
from ...base.logging import get_logger
from ...di.container import ProvidersContainer, build_container
from ...formats.resolver import FormatResolver

FORMAT_CHOICES = {
    "playlist": "get_playlist_with_meta",
    "presentations": "get_presentations_with_meta",
    "instructions": "get_instructions_with_meta",
    "expanded": "get_expanded_instructions_with_meta",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-providers",
        description="Browse content providers and resolve playlist, plan or instruction views",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List providers and their native views
  content-providers providers

  # Browse a catalog file
  content-providers --catalog catalog.json browse catalog /
  content-providers --catalog catalog.json browse catalog /sermons

  # Resolve a view (derived from another view when not native)
  content-providers resolve lessonschurch /lessons/p/s/l/v --format instructions
  content-providers --no-lossy resolve catalog /sermons --format playlist
        """,
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--catalog", type=str, help="Catalog file (JSON or YAML) for the catalog provider")
    parser.add_argument("--no-lossy", action="store_true", help="Only serve natively supported views")
    parser.add_argument("--log-json", action="store_true", help="Emit resolver logs as JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every resolution step")

    sub = parser.add_subparsers(dest="command")

    providers = sub.add_parser("providers", help="List providers and capabilities")
    providers.add_argument("--all", action="store_true", help="Include providers that are not implemented yet")

    browse = sub.add_parser("browse", help="List folders and files under a path")
    browse.add_argument("provider", help="Provider id")
    browse.add_argument("path", nargs="?", default="/", help="Content path (default: root)")

    resolve = sub.add_parser("resolve", help="Resolve a content view with provenance metadata")
    resolve.add_argument("provider", help="Provider id")
    resolve.add_argument("path", help="Content path")
    resolve.add_argument("--format", "-f", choices=sorted(FORMAT_CHOICES), default="playlist", help="View to resolve")
    resolve.add_argument("--resolution", type=int, help="Preferred video resolution (playlist only)")
    return parser


def build_cli_container(args: argparse.Namespace) -> ProvidersContainer:
    config: Dict[str, Any] = {}
    if args.catalog:
        config["catalog"] = {"catalog_file": args.catalog}
    if args.no_lossy:
        config["resolver"] = {"allow_lossy": False}
    return build_container(config)


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def _run_browse(container: ProvidersContainer, args: argparse.Namespace) -> int:
    provider = container.provider(args.provider)
    items = await provider.browse(args.path)
    _dump([item.to_dict() for item in items])
    return 0


async def _run_resolve(container: ProvidersContainer, resolver: FormatResolver, args: argparse.Namespace) -> int:
    provider = container.provider(args.provider)
    method = getattr(resolver, FORMAT_CHOICES[args.format])
    if args.format == "playlist":
        result = await method(provider, args.path, None, args.resolution)
    else:
        result = await method(provider, args.path)
    _dump(result.to_dict())
    return 0 if result.is_supported else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        print(__version__)
        return 0
    if not args.command:
        parser.print_help()
        return 2

    logger = get_logger(
        "content_providers.resolver",
        json_mode=args.log_json,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    container = build_cli_container(args)

    try:
        if args.command == "providers":
            infos = container.available_providers()
            if not args.all:
                infos = [i for i in infos if i.implemented]
            _dump([i.to_dict() for i in infos])
            return 0
        if args.command == "browse":
            return asyncio.run(_run_browse(container, args))
        resolver = FormatResolver(options=container.resolver().options, logger=logger)
        return asyncio.run(_run_resolve(container, resolver, args))
    except UnknownProviderError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
