# Minimal CLI using argparse that loads a TOML config and resolves keys against CDN indices.
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cdn_index.core.config import load_config
from cdn_index.core.errors import CDNIndexError
from cdn_index.core.resolver import IndexResolver
from cdn_index.core.types import key_from_hex, key_to_hex
from cdn_index.interfaces.progress import LoggingProgress


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cdn-index", description="Resolve content keys against CDN archive indices"
    )
    p.add_argument("config", type=Path, help="Config TOML file")
    p.add_argument("--offline", action="store_true", help="Read indices from base_path only")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Show where a key is stored")
    lookup.add_argument("key", help="Content key (32 hex characters)")

    fetch = sub.add_parser("fetch", help="Download the content for a key")
    fetch.add_argument("key", help="Content key (32 hex characters)")
    fetch.add_argument("-o", "--output", type=Path, required=True, help="Output file")

    sub.add_parser("stats", help="Show archive and entry counts")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 2

    key = None
    if args.command in ("lookup", "fetch"):
        try:
            key = key_from_hex(args.key)
        except ValueError as e:
            print(f"Invalid key {args.key!r}: {e}")
            return 2

    if args.offline:
        config.online = False

    try:
        with IndexResolver.initialize(config, progress=LoggingProgress()) as resolver:
            if args.command == "stats":
                print(f"archives={len(config.archives)} entries={len(resolver)}")
                return 0

            if args.command == "lookup":
                entry = resolver.lookup(key)
                if entry is None:
                    print("missing")
                    return 1
                print(
                    f"archive={resolver.archive_id(entry)} index={entry.archive_index} "
                    f"offset={entry.offset} size={entry.size}"
                )
                return 0

            stream = resolver.open(key)
            try:
                args.output.write_bytes(stream.read())
            finally:
                stream.close()
            print(f"Wrote {key_to_hex(key)} to {args.output}")
            return 0
    except CDNIndexError as e:
        print(f"Error: {e}")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
