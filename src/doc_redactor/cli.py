"""CLI interface for doc-redactor.

Usage:
    # Redact a document (stdin or --input), write redacted text to stdout
    cat letter.txt | python -m doc_redactor.cli redact

    # Redacted text plus the result summary as JSON
    python -m doc_redactor.cli redact --input letter.txt --json

    # Show what would be redacted, without changing anything
    python -m doc_redactor.cli scan --input letter.txt

Settings come from a YAML file (--config or $DOC_REDACTOR_CONFIG);
flags override it.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import create_redactor, load_config, load_from_yaml
from .editor import TextDocument
from .errors import ConfigError
from .redactor import Redactor

DEFAULT_CONFIG = os.environ.get("DOC_REDACTOR_CONFIG", "")


def _build_redactor(args: argparse.Namespace) -> Redactor:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.marker:
        cfg["marker"] = args.marker
    if args.no_header:
        cfg["header_enabled"] = False
    if args.skip_types:
        cfg["skip_types"] |= load_config({"skip_types": args.skip_types.split(",")})["skip_types"]
    if args.allow_list:
        cfg["allow_list"] |= set(args.allow_list.split(","))
    return create_redactor(cfg)


def _read_input(args: argparse.Namespace) -> str:
    if args.input:
        with open(args.input, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def cmd_redact(args: argparse.Namespace) -> int:
    """Redact a document and write it out."""
    redactor = _build_redactor(args)
    doc = TextDocument(_read_input(args))
    result = redactor.redact_document(doc)

    if args.json:
        json.dump({"text": doc.render(), "result": result.to_dict()}, sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
    elif result.success:
        sys.stdout.write(doc.render())
    else:
        sys.stderr.write(f"Redaction failed: {result.error}\n")

    return 0 if result.success else 1


def cmd_scan(args: argparse.Namespace) -> int:
    """Print the redaction plan as JSON."""
    redactor = _build_redactor(args)
    plan = redactor.plan(_read_input(args))
    json.dump(plan.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="doc_redactor",
        description="Redact emails, phone numbers and SSNs from documents",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--marker", default="", help="Replacement text for redacted items")
    parser.add_argument("--no-header", action="store_true", help="Do not add the confidentiality header")
    parser.add_argument("--skip-types", default="", help="Comma-separated categories to skip (EMAIL,PHONE,SSN)")
    parser.add_argument("--allow-list", default="", help="Comma-separated values to never redact")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    p_redact = sub.add_parser("redact", help="Redact a document (stdin or --input)")
    p_redact.add_argument("--input", default="", help="Read from file instead of stdin")
    p_redact.add_argument("--json", action="store_true", help="Emit text and result as JSON")
    p_scan = sub.add_parser("scan", help="Print the redaction plan as JSON")
    p_scan.add_argument("--input", default="", help="Read from file instead of stdin")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "redact": cmd_redact,
        "scan": cmd_scan,
    }
    try:
        return cmds[args.command](args)
    except (ConfigError, OSError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
