"""Command-line interface for generating TypeScript declarations for xAPI schemas."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from xapi_stub_generator import xapi_types
from xapi_stub_generator.errors import XapiStubError
from xapi_stub_generator.run import SchemaLoadError, run

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate TypeScript declarations for an xAPI schema.")

    parser.add_argument(
        "schema",
        type=str,
        help="path to the schema file (*.json, *.yaml or *.yml).",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="",
        help="file to write the declarations to; defaults to stdout if omitted.",
    )

    parser.add_argument(
        "--xapi-import",
        dest="xapi_import",
        type=str,
        default=xapi_types.DEFAULT_LIB_NAME,
        help="module to import the base class from.",
    )

    parser.add_argument(
        "--class-name",
        dest="class_name",
        type=str,
        default=xapi_types.DEFAULT_MAIN_NAME,
        help="name of the generated class and interface.",
    )

    parser.add_argument(
        "--base",
        type=str,
        default=xapi_types.DEFAULT_BASE_NAME,
        help="name of the extended base class.",
    )

    parser.add_argument(
        "--no-connect",
        dest="with_connect",
        default=True,
        action="store_false",
        help="skip generating the connect export.",
    )

    parser.add_argument(
        "--format",
        default=False,
        action="store_true",
        help="format the output with prettier.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        default=False,
        action="store_true",
        help="enable debug logging.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the declaration generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root_directory = os.getcwd()
    logger.debug("Working from root directory: %s", root_directory)

    try:
        run(args, root_directory)
    except (XapiStubError, SchemaLoadError) as e:
        logger.error("Generation failed: %s", e)
        return 1

    return 0
