"""CLI interface for fieldmask.

Usage:
    # Mask a JSON document (stdin: JSON, stdout: masked JSON).
    # Object keys are looked up in the field-default registry.
    echo '{"user": "usagi", "password": "hunter2"}' | \
        fieldmask --field password=filled mask

    # Mask plain text with one annotation
    echo -n 'ヤハッ！' | fieldmask mask-text --annotation hash

    # List registered mask types per table
    fieldmask types

Settings come from --config (YAML, see fieldmask.config) and are
overridden by the command-line flags.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import create_masker, load_config, load_from_yaml
from .errors import MaskError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = os.environ.get("FIELDMASK_CONFIG", "")


def _parse_field(text: str) -> tuple[str, str]:
    name, sep, mask_type = text.partition("=")
    if not sep or not name or not mask_type:
        raise argparse.ArgumentTypeError(f"expected NAME=TYPE, got {text!r}")
    return name, mask_type


def _build_masker(args: argparse.Namespace):
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.mask_char is not None:
        cfg["mask_char"] = args.mask_char
    if args.seed is not None:
        cfg["seed"] = args.seed
    for name, mask_type in args.field or []:
        cfg["field_defaults"][name] = mask_type
    return create_masker(cfg)


def cmd_mask(args: argparse.Namespace) -> None:
    """Mask a JSON document on stdin."""
    masker = _build_masker(args)
    doc = json.loads(sys.stdin.read())
    json.dump(masker.mask(doc), sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_mask_text(args: argparse.Namespace) -> None:
    """Mask plain text on stdin with a single annotation."""
    masker = _build_masker(args)
    text = sys.stdin.read()
    sys.stdout.write(masker.mask_text(args.annotation, text))
    sys.stdout.write("\n")


def cmd_types(args: argparse.Namespace) -> None:
    """Dump registered mask types as JSON."""
    masker = _build_masker(args)
    json.dump(masker.mask_types(), sys.stdout, indent=2)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fieldmask",
        description="Mask sensitive values in structured data",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG or None, help="YAML config path")
    parser.add_argument("--mask-char", default=None, help="Mask character")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random masks")
    parser.add_argument("--field", action="append", type=_parse_field, metavar="NAME=TYPE",
                        help="Field default (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("mask", help="Mask a JSON document (stdin)")
    p_text = sub.add_parser("mask-text", help="Mask plain text (stdin)")
    p_text.add_argument("--annotation", required=True, help="Annotation, e.g. filled or hash")
    sub.add_parser("types", help="List registered mask types")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
    logger.debug("Running %s", args.command)

    cmds = {
        "mask": cmd_mask,
        "mask-text": cmd_mask_text,
        "types": cmd_types,
    }
    try:
        cmds[args.command](args)
    except (MaskError, json.JSONDecodeError) as e:
        sys.stderr.write(f"fieldmask: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
