"""Compile an xAPI schema into declaration nodes.

The schema is a nested object with up to three families at the top level: commands,
configuration and status. Within a family, keys starting with an uppercase letter
are structure and keys starting with a lowercase letter are attributes (product
metadata, access roles and so on), which are ignored.

Parsing fails fast: the first malformed part of the schema raises an error and no
document is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from xapi_stub_generator import xapi_types
from xapi_stub_generator.errors import SchemaShapeError
from xapi_stub_generator.nodes import (
    ArrayTree,
    Command,
    Generic,
    List,
    Literal,
    MainClass,
    Member,
    Plain,
    Root,
    Tree,
    TypeExpression,
)
from xapi_stub_generator.parser_dto import ParseOptions, TreeContext
from xapi_stub_generator.xapi_types import SchemaAttribute, SchemaFamily, ValueSpaceType

logger = logging.getLogger(__name__)

# family key -> (interface name, main class member name, wrapping type alias)
FAMILIES: dict[str, tuple[str, str, str | None]] = {
    SchemaFamily.COMMAND: ("CommandTree", "Command", None),
    SchemaFamily.CONFIGURATION: ("ConfigTree", "Config", "Configify"),
    SchemaFamily.STATUS: ("StatusTree", "Status", "Statusify"),
}


def is_structural(key: str) -> bool:
    """Whether a schema key describes structure, rather than being an attribute."""
    return isinstance(key, str) and key[:1].isupper()


def structural_items(node: Mapping[str, Any]) -> Iterator[tuple[str, Any]]:
    """Iterate over the structural keys of a schema node, in input order."""
    for key, value in node.items():
        if is_structural(key):
            yield key, value


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _type_name(value: Any) -> str:
    return type(value).__name__


# Flags are the strings 'True' and 'False'. YAML schemas may also hold booleans.
def _is_set(flag: Any) -> bool:
    return flag is True or flag == xapi_types.TRUE


def _is_unset(flag: Any) -> bool:
    return flag is False or flag == xapi_types.FALSE


class SchemaParser:
    """Builds a `Root` from a schema object."""

    def __init__(self, options: ParseOptions | None = None):
        """Initialize the parser.

        Args:
            options (ParseOptions | None, optional): Options for the generated document. Defaults to None,
                which uses the default options.
        """
        self.options = options or ParseOptions()
        self.root = Root(self.options.xapi_import)
        self._builtins_added = False

    @property
    def main(self) -> MainClass:
        return self.root.get_main()

    def parse(self, schema: Mapping[str, Any]) -> Root:
        """Parse a full schema.

        Args:
            schema (Mapping[str, Any]): The schema object.

        Raises:
            SchemaShapeError: If the schema, or any part of it, is malformed.
            XapiStubError: If the schema leads to conflicting declarations.

        Returns:
            Root: The populated document.
        """
        if not isinstance(schema, Mapping):
            raise SchemaShapeError([], f"expected an object, got {_type_name(schema)}")

        self.root.add_main(
            self.options.class_name,
            base=self.options.base,
            with_connect=self.options.with_connect,
        )

        for key, value in schema.items():
            if key in FAMILIES:
                self._parse_family(key, value)
            else:
                logger.debug("Ignoring unknown top-level key '%s'.", key)

        return self.root

    def _parse_family(self, key: str, value: Any):
        interface_name, member_name, alias = FAMILIES[key]

        if not isinstance(value, Mapping):
            raise SchemaShapeError([key], f"expected an object, got {_type_name(value)}")

        if alias is not None and not self._builtins_added:
            self.root.add_generic_interfaces()
            self._builtins_added = True

        interface = self.root.add_interface(interface_name)
        member_type = Generic(alias, interface) if alias is not None else Plain(interface.name)
        self.main.add_child(Member(member_name, member_type))

        self._parse_children(TreeContext(self.root, interface, [key]), value)

    def _parse_children(self, context: TreeContext, node: Mapping[str, Any]):
        for key, value in structural_items(node):
            self._parse_node(context, key, value)

    def _parse_node(self, context: TreeContext, key: str, value: Any):
        path = [*context.path, key]

        if _is_sequence(value):
            self._parse_sequence(context, key, value)
            return

        if not isinstance(value, Mapping):
            raise SchemaShapeError(path, f"expected an object or an array, got {_type_name(value)}")

        if _is_set(value.get(SchemaAttribute.COMMAND)):
            context.container.add_child(self._parse_command(context, key, value))

        elif SchemaAttribute.VALUE_SPACE in value:
            context.container.add_child(self._parse_leaf(path, key, value))

        else:
            tree = context.container.add_child(Tree(key))
            self._parse_children(context.descend(tree, key), value)

    def _parse_sequence(self, context: TreeContext, key: str, elements: Sequence[Any]):
        """Parse an array of the schema.

        Arrays of leaf descriptors are leaves. Any other array is a keyed collection:
        elements with an `id` become trees named after their id, the children of
        elements without an id are added to the collection itself.
        """
        path = [*context.path, key]

        if elements and isinstance(elements[0], Mapping) and SchemaAttribute.VALUE_SPACE in elements[0]:
            context.container.add_child(self._parse_leaf(path, key, elements[0]))
            return

        array_tree = context.container.add_child(ArrayTree(key))
        array_context = context.descend(array_tree, key)

        for index, element in enumerate(elements):
            if not isinstance(element, Mapping):
                raise SchemaShapeError([*path, str(index)], f"expected an object, got {_type_name(element)}")

            if SchemaAttribute.ID in element:
                element_id = str(element[SchemaAttribute.ID])
                tree = array_tree.add_child(Tree(element_id))
                self._parse_children(array_context.descend(tree, element_id), element)
                continue

            for child_key, child_value in structural_items(element):
                if any(child.name == child_key for child in array_tree.children):
                    logger.debug("Skipping repeated key '%s' in %s.", child_key, ".".join(path))
                    continue
                self._parse_node(array_context, child_key, child_value)

    def _parse_command(self, context: TreeContext, key: str, node: Mapping[str, Any]) -> Command:
        path = [*context.path, key]
        parameters = list(structural_items(node))

        args = None
        if parameters:
            args = self.root.add_interface(context.args_name(key))
            for parameter_key, parameter in parameters:
                args.add_child(self._parse_parameter([*path, parameter_key], parameter_key, parameter))

        return Command(
            key,
            args,
            docstring=_docstring(node),
            multiline=_is_set(node.get(SchemaAttribute.MULTILINE)),
        )

    def _parse_parameter(self, path: list[str], key: str, parameter: Any) -> Member:
        # Array valued parameters are described by their first element.
        if _is_sequence(parameter):
            if not parameter:
                raise SchemaShapeError(path, "empty parameter description")
            parameter = parameter[0]

        if not isinstance(parameter, Mapping):
            raise SchemaShapeError(path, f"expected an object, got {_type_name(parameter)}")

        if SchemaAttribute.VALUE_SPACE not in parameter:
            raise SchemaShapeError(path, "command parameter without value space")

        return self._parse_leaf(path, key, parameter)

    def _parse_leaf(self, path: list[str], key: str, node: Mapping[str, Any]) -> Member:
        return Member(
            key,
            infer_type(path, node[SchemaAttribute.VALUE_SPACE]),
            required=not _is_unset(node.get(SchemaAttribute.REQUIRED)),
            docstring=_docstring(node),
        )


def _docstring(node: Mapping[str, Any]) -> str | None:
    description = node.get(SchemaAttribute.DESCRIPTION)
    return str(description) if description else None


def infer_type(path: Sequence[str], value_space: Any) -> TypeExpression:
    """Infer the type of a leaf from its value space.

    Args:
        path (Sequence[str]): Location of the leaf, used in error messages.
        value_space (Any): The `ValueSpace` descriptor of the leaf.

    Raises:
        SchemaShapeError: If the value space has no type, an unknown type, or is a literal without values.

    Returns:
        TypeExpression: The type of the leaf.
    """
    location = [*path, SchemaAttribute.VALUE_SPACE]

    if not isinstance(value_space, Mapping):
        raise SchemaShapeError(location, f"expected an object, got {_type_name(value_space)}")

    value_space_type = value_space.get(SchemaAttribute.TYPE)

    if value_space_type is None:
        raise SchemaShapeError(location, "value space without type")

    if not isinstance(value_space_type, str):
        raise SchemaShapeError(location, f"expected a type name, got {_type_name(value_space_type)}")

    if value_space_type in xapi_types.VALUESPACE_TYPE_TO_TYPESCRIPT:
        return Plain(xapi_types.VALUESPACE_TYPE_TO_TYPESCRIPT[value_space_type])

    if value_space_type in xapi_types.VALUESPACE_ARRAY_TYPE_TO_TYPESCRIPT:
        return List(Plain(xapi_types.VALUESPACE_ARRAY_TYPE_TO_TYPESCRIPT[value_space_type]))

    if value_space_type in (ValueSpaceType.LITERAL, ValueSpaceType.LITERAL_ARRAY):
        values = value_space.get(SchemaAttribute.VALUE)
        if not _is_sequence(values) or not values:
            raise SchemaShapeError(location, f"{value_space_type} value space without values")

        literal = Literal(*(str(value) for value in values))
        return literal if value_space_type == ValueSpaceType.LITERAL else List(literal)

    raise SchemaShapeError(location, f"unknown value space type '{value_space_type}'")


def parse(schema: Mapping[str, Any], options: ParseOptions | None = None) -> Root:
    """Parse a schema into a document.

    Args:
        schema (Mapping[str, Any]): The schema object.
        options (ParseOptions | None, optional): Options for the generated document. Defaults to None.

    Returns:
        Root: The document.
    """
    return SchemaParser(options).parse(schema)


def generate(schema: Mapping[str, Any], options: ParseOptions | None = None) -> str:
    """Generate declaration text for a schema.

    Args:
        schema (Mapping[str, Any]): The schema object.
        options (ParseOptions | None, optional): Options for the generated document. Defaults to None.

    Returns:
        str: The declaration text.
    """
    return parse(schema, options).serialize()
