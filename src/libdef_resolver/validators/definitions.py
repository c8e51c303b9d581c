"""CLI entrypoint for validating versioned library definition ranges."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

from ..config import ConfigError, Settings, load_settings
from ..core import validate_definitions
from ..logging import configure_logging
from ..report import aggregate
from ..summary import render_summary

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "candidates.schema.json"

_YAML_SUFFIXES = {".yaml", ".yml"}


def _load_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        import yaml

        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f" Failed to read YAML: {exc}") from exc
    return json.loads(text)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def load_manifest(input_path: Path, schema_path: Path = DEFAULT_SCHEMA) -> list[tuple[str, str, str]]:
    """Read a candidate manifest and flatten it into (name, version, range) entries.

    Raises:
        ValueError: If the document does not match the schema.
    """
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    document = _load_document(input_path)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ValueError("\n" + _format_errors(errors))

    return [
        (definition["name"], definition["version"], range_text)
        for definition in document["definitions"]
        for range_text in definition["ranges"]
    ]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the JSON or YAML candidate manifest to validate",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=DEFAULT_SCHEMA,
        help="Path to the JSON schema used for validating the manifest",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a settings file (defaults to $LIBDEF_RESOLVER_CONFIG or libdef-resolver.json)",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Directory name prefix of each range (overrides the settings file)",
    )
    parser.add_argument(
        "--warn-only",
        action="store_true",
        help="Report problems without failing",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the aggregated report as JSON",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: $LIBDEF_RESOLVER_LOG_LEVEL or WARNING)",
    )
    return parser.parse_args(argv)


def _effective_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    return Settings(
        directory_prefix=settings.directory_prefix if args.prefix is None else args.prefix,
        warn_only=settings.warn_only or args.warn_only,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        settings = _effective_settings(args)
        entries = load_manifest(args.input, args.schema)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: Manifest failed validation:{exc}", file=sys.stderr)
        return 1

    result = validate_definitions(entries, prefix=settings.directory_prefix or None)

    if args.as_json:
        print(json.dumps(aggregate(result), indent=2))
    else:
        print(render_summary(result), end="")

    if result.ok or settings.warn_only:
        return 0
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
