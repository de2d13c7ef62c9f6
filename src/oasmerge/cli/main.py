# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the oasmerge command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from oasmerge.config.settings import ConfigError, MergeConfig, load_config
from oasmerge.documents.codec import DocumentError, load_document, serialize, write_document
from oasmerge.resolver.engine import MergeError, Merger

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the oasmerge CLI."""
    parser = argparse.ArgumentParser(
        prog="oasmerge",
        description="Merge a multi-file OpenAPI description into a single document.",
    )
    parser.add_argument(
        "input",
        help="Root document to merge (YAML or JSON)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="File to write the merged document to; the format follows its extension (default: print YAML)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="YAML file with $include class rules and the inline policy",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report fetched documents",
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        help="Trace every resolved reference and include",
    )

    args = parser.parse_args()
    sys.exit(_run(args))


# ################
# Implementation
# ################


def _run(args: argparse.Namespace) -> int:
    """Merge the input document and write or print the result."""
    _configure_logging(args)

    config = MergeConfig()
    if args.config:
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    input_path = Path(args.input)
    merger = Merger(config)
    try:
        document = load_document(input_path)
        merged = merger.merge(document, input_path)
        if args.output:
            write_document(merged, Path(args.output))
    except (DocumentError, MergeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in merger.warnings:
        print(f"Warning: {warning.message}", file=sys.stderr)

    if args.output:
        print(f"Merged document written to '{args.output}'.")
    else:
        print(serialize(merged), end="")
    return 0


def _configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        # Warnings are collected on the merger and printed once at the end.
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
