"""Top-level module for declaration generation."""

from __future__ import annotations

import argparse
import json
import logging
import os.path
import subprocess
import sys
from typing import Any

import yaml

from xapi_stub_generator.parser import generate
from xapi_stub_generator.parser_dto import ParseOptions

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
YAML_SUFFIXES = (".yaml", ".yml")


class SchemaLoadError(Exception):
    """Raised when a schema file cannot be read or decoded."""

    pass


def load_schema(path: str) -> dict[str, Any]:
    """Load a schema from a JSON or YAML file.

    Files ending in `.yaml` or `.yml` are read as YAML, everything else as JSON.

    Args:
        path (str): Path to the schema file.

    Raises:
        SchemaLoadError: If the file cannot be read or decoded.

    Returns:
        dict[str, Any]: The schema object.
    """
    try:
        with open(path, encoding="utf8") as schema_file:
            text = schema_file.read()
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file '{path}': {e}") from e

    if path.endswith(YAML_SUFFIXES):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SchemaLoadError(f"Invalid YAML in schema file '{path}': {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file '{path}': {e}") from e


def format_outputs(raw_input: str) -> str:
    """Formats raw declaration text using prettier.

    Args:
        raw_input (str): The unformatted input.

    Returns:
        str: The formatted outputs, or the unformatted input if prettier is not available or fails.
    """
    try:
        result = subprocess.run(
            ["prettier", "--parser", "typescript"],
            input=raw_input,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError:
        logger.error("prettier not found. Please install prettier: npm install -g prettier")
        return raw_input
    except subprocess.CalledProcessError as e:
        logger.error(f"Prettier formatting failed: {e}")
        logger.error(f"Stderr: {e.stderr}")
        return raw_input

    return result.stdout


def generate_declarations(schema_path: str, options: ParseOptions, formatted: bool = False) -> str:
    """Entry-point for generating declarations from a schema file.

    Args:
        schema_path (str): Path to the schema file.
        options (ParseOptions): Options for the generated document.
        formatted (bool, optional): Whether to run the output through prettier. Defaults to False.

    Returns:
        str: The declaration text.
    """
    schema = load_schema(schema_path)
    logger.debug("Loaded schema from '%s'.", schema_path)

    output = generate(schema, options)

    if formatted:
        output = format_outputs(output)

    return output


def run(args: argparse.Namespace, root_directory: str):
    """Run the generator on a schema file.

    The output is written to the requested file, or to stdout if no output file is given.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
        root_directory (str): The directory, from which the generator is executed.
    """
    schema_path = os.path.join(root_directory, args.schema)
    output_path: str = args.output

    options = ParseOptions(
        xapi_import=args.xapi_import,
        class_name=args.class_name,
        base=args.base,
        with_connect=args.with_connect,
    )

    output = generate_declarations(schema_path, options, formatted=args.format)

    if not output_path:
        sys.stdout.write(output)
        return

    output_path = os.path.join(root_directory, output_path)
    output_directory = os.path.dirname(output_path)
    if output_directory:
        os.makedirs(output_directory, exist_ok=True)

    with open(output_path, "w", encoding="utf8") as output_file:
        output_file.write(output)

    logger.info("Wrote declarations to '%s'.", output_path)
