#!/usr/bin/env python3
"""Local CLI entrypoint to find the definitions matching a runtime version.

Usage:
  python scripts/resolve.py --target v0.40.3 --input candidates.json [--prefix flow_]

Prints the matching candidates as JSON, in manifest order.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from libdef_resolver.config import ConfigError, load_settings
from libdef_resolver.core import collect_candidates, resolve
from libdef_resolver.errors import VersionParseError
from libdef_resolver.logging import configure_logging
from libdef_resolver.parsers.version import parse_target
from libdef_resolver.validators.definitions import load_manifest


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--target", required=True)
    parser.add_argument("--input", type=Path, required=True)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--prefix", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        target = parse_target(args.target)
        settings = load_settings(args.config)
        entries = load_manifest(args.input)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except VersionParseError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: Manifest failed validation:{exc}", file=sys.stderr)
        return 1

    prefix = settings.directory_prefix if args.prefix is None else args.prefix
    candidates, problems = collect_candidates(entries, prefix or None)
    for identity, errors in problems.items():
        for err in errors:
            print(f"WARNING: skipping {identity}: {err}", file=sys.stderr)

    matches = resolve(target, candidates)
    print(json.dumps([match.to_dict() for match in matches], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
