"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import override

INDENT = "  "

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
NON_IDENTIFIER_CHARACTERS = re.compile(r"[^A-Za-z0-9_$]")


def is_identifier(name: str) -> bool:
    """Whether a name can be used as a bare property key in a declaration.

    Args:
        name (str): The name to check.

    Returns:
        bool: True, if the name needs no quoting.
    """
    return IDENTIFIER_PATTERN.match(name) is not None


def quote_name(name: str) -> str:
    """Quote a property name, if it is not a valid identifier.

    E.g. 'Option.1' becomes '"Option.1"', while 'Volume' stays as it is.

    Args:
        name (str): The original name.

    Returns:
        str: The name, ready to be used as a property key.
    """
    if is_identifier(name):
        return name
    return json.dumps(name)


def quote_literal(value: str) -> str:
    """Create a single-quoted string literal type.

    Backslashes, quotes and control characters are escaped the way JSON does.

    Args:
        value (str): The literal value.

    Returns:
        str: The quoted literal, e.g. `'On'`.
    """
    escaped = json.dumps(value, ensure_ascii=False)[1:-1].replace("'", "\\'")
    return f"'{escaped}'"


def sanitize_name(name: str) -> str:
    """Remove all characters that are not allowed in an identifier.

    Args:
        name (str): The original name.

    Returns:
        str: The sanitized name.
    """
    return NON_IDENTIFIER_CHARACTERS.sub("", name)


@dataclass
class TypedVariable:
    """A name with a type annotation, e.g. a property or a parameter."""

    name: str
    type_name: str
    optional: bool = False

    @override
    def __str__(self) -> str:
        """The string representation of the variable.

        The name is quoted if needed and a `?` marks optional variables.
        """
        marker = "?" if self.optional else ""
        return f"{quote_name(self.name)}{marker}: {self.type_name}"


def join_parameters(parameters: Sequence[TypedVariable | str] | None) -> str:
    """Joins parameters by means of ', '.

    Args:
        parameters (Sequence[TypedVariable | str] | None): The parameters to join.

    Returns:
        str: The joined parameters.
    """
    if parameters:
        return ", ".join(str(p) for p in parameters if p)

    else:
        return ""


def new_group(name: str, members: Sequence[str]) -> str:
    """Create a string for a generic name and its type arguments.

    For example, when the group name is 'Configify', and the member is 'ConfigTree',
    the output will be 'Configify<ConfigTree>'.

    Args:
        name (str): The name of the group.
        members (Sequence[str]): The members of the group.

    Returns:
        str: The resulting group string.
    """
    return f"{name}<{join_parameters(members)}>"


def new_function(
    name: str,
    parameters: Sequence[TypedVariable | str] | None = None,
    return_type: str = "any",
) -> str:
    """Create a string for a callable signature returning a promise.

    The return type becomes the default of the type parameter `R`, so callers may
    narrow the result type, e.g. `Dial<R=any>(args: DialArgs): Promise<R>`.

    Args:
        name (str): The function name.
        parameters (Sequence[TypedVariable | str] | None, optional): The function parameters, if any.
            Defaults to None.
        return_type (str, optional): The default result type. Defaults to "any".

    Returns:
        str: The function string.
    """
    arguments = join_parameters(parameters)
    return f"{quote_name(name)}<R={return_type}>({arguments}): Promise<R>"


def new_interface_declaration(name: str, bases: Sequence[str] | None = None) -> str:
    """Creates the opening part of an interface declaration.

    For example, for a name of 'Config' and bases 'Gettable', the output will be
    'export interface Config extends Gettable'.

    Args:
        name (str): The interface name.
        bases (Sequence[str] | None, optional): The extended interfaces. Defaults to None.

    Returns:
        str: The interface declaration.
    """
    if bases:
        return f"export interface {name} extends {join_parameters(bases)}"
    else:
        return f"export interface {name}"


def new_class_declaration(name: str, base: str) -> str:
    """Creates an exported class declaration with an empty body.

    Args:
        name (str): The class name.
        base (str): The extended class.

    Returns:
        str: The class declaration.
    """
    return f"export class {name} extends {base} {{}}"


def new_docstring(docstring: str) -> list[str]:
    """Create the lines of a comment block for a docstring.

    A `*/` inside the docstring is written as `*\\/`, so it cannot end the comment.

    Args:
        docstring (str): The docstring, possibly spanning several lines.

    Returns:
        list[str]: The comment lines, without indentation.
    """
    lines = ["/**"]
    for line in docstring.strip().splitlines():
        stripped = line.rstrip().replace("*/", "*\\/")
        lines.append(f" * {stripped}" if stripped else " *")
    lines.append(" */")
    return lines


def indent(lines: Sequence[str], depth: int = 1) -> list[str]:
    """Indent lines by a number of levels. Empty lines stay empty.

    Args:
        lines (Sequence[str]): The lines to indent.
        depth (int, optional): The number of indentation levels. Defaults to 1.

    Returns:
        list[str]: The indented lines.
    """
    prefix = INDENT * depth
    return [f"{prefix}{line}" if line else line for line in lines]
