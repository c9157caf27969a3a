"""Render declaration nodes into TypeScript declaration text."""

from __future__ import annotations

from collections.abc import Sequence

from xapi_stub_generator import helper, xapi_types
from xapi_stub_generator.nodes import (
    ArrayTree,
    Builtins,
    Command,
    Generic,
    ImportStatement,
    Interface,
    List,
    Literal,
    MainClass,
    Member,
    Node,
    Plain,
    Root,
    Tree,
    TypeExpression,
)

INTERFACE_SEPARATOR = ";"
TREE_SEPARATOR = ","

BUILTIN_DECLARATIONS = """\
export interface Gettable<T> {
  get(): Promise<T>;
}

export interface Settable<T> {
  set(value: T): Promise<void>;
}

export interface Listenable<T> {
  on(handler: (value: T) => void): () => void;
  once(handler: (value: T) => void): () => void;
}

type Configify<T> = [T] extends [object]
  ? { [P in keyof T]: Configify<T[P]>; } & Gettable<T> & Listenable<T>
  : Gettable<T> & Settable<T> & Listenable<T>;

type Statusify<T> = [T] extends [object]
  ? { [P in keyof T]: Statusify<T[P]>; } & Gettable<T> & Listenable<T>
  : Gettable<T> & Listenable<T>;"""

BodyNode = Member | Command | Tree | ArrayTree


class Writer:
    """Renders any node, and transitively its children, into declaration text."""

    def render(self, node: Node) -> str:
        """Render a node.

        Args:
            node (Node): The node to render. Any node of the model can be rendered on its own.

        Returns:
            str: The declaration text.
        """
        match node:
            case Plain() | Literal() | List() | Generic():
                return self.render_type(node)
            case Member() | Command() | Tree() | ArrayTree():
                return "\n".join(self._body_node_lines(node))
            case Interface():
                return self._render_interface(node.name, node.bases, node.children)
            case MainClass():
                return self._render_main(node)
            case ImportStatement():
                return f'import {{ {helper.join_parameters(node.names)} }} from "{node.module}";'
            case Builtins():
                return BUILTIN_DECLARATIONS
            case Root():
                return self._render_root(node)
            case _:
                raise TypeError(f"Cannot render node of type {type(node).__name__}.")

    def render_type(self, type_expression: TypeExpression) -> str:
        """Render a type expression.

        Args:
            type_expression (TypeExpression): The type expression.

        Returns:
            str: The type, e.g. `number`, `'On' | 'Off'` or `('A' | 'B')[]`.
        """
        match type_expression:
            case Plain(name=name):
                return name
            case Literal(values=values):
                return " | ".join(helper.quote_literal(value) for value in values)
            case List(element=Literal() as element):
                return f"({self.render_type(element)})[]"
            case List(element=element):
                return f"{self.render_type(element)}[]"
            case Generic(alias=alias, interface=interface):
                return helper.new_group(alias, [interface])
            case _:
                raise TypeError(f"Cannot render type of type {type(type_expression).__name__}.")

    def _render_root(self, root: Root) -> str:
        declarations = root.children[1:]
        if not declarations:
            return ""

        main_classes = [node for node in declarations if isinstance(node, MainClass)]
        others = [node for node in declarations if not isinstance(node, MainClass)]

        blocks = [self.render(root.import_statement)]
        blocks.extend(self.render(node) for node in others)
        blocks.extend(self.render(node) for node in main_classes)
        return "\n\n".join(blocks) + "\n"

    def _render_main(self, main: MainClass) -> str:
        exports: list[str] = []
        if main.with_default:
            exports.append(f"export default {main.name};")
        if main.with_connect:
            exports.append(f"export const connect = {xapi_types.CONNECT_GENERATOR_NAME}({main.name});")

        blocks = [helper.new_class_declaration(main.name, main.base)]
        if exports:
            blocks.append("\n".join(exports))
        blocks.append(self._render_interface(main.name, [], main.children))
        return "\n\n".join(blocks)

    def _render_interface(self, name: str, bases: Sequence[str], children: Sequence[BodyNode]) -> str:
        declaration = helper.new_interface_declaration(name, bases)
        if not children:
            return f"{declaration} {{}}"

        lines = [f"{declaration} {{"]
        lines.extend(helper.indent(self._body_lines(children, INTERFACE_SEPARATOR)))
        lines.append("}")
        return "\n".join(lines)

    def _body_lines(self, children: Sequence[BodyNode], separator: str) -> list[str]:
        lines: list[str] = []
        for child in children:
            child_lines = self._body_node_lines(child)
            child_lines[-1] += separator
            lines.extend(child_lines)
        return lines

    def _body_node_lines(self, node: BodyNode) -> list[str]:
        """Lines of a member, command or tree, without the trailing separator."""
        lines: list[str] = []
        match node:
            case Member():
                if node.docstring:
                    lines.extend(helper.new_docstring(node.docstring))
                variable = helper.TypedVariable(node.name, self.render_type(node.type), optional=not node.required)
                lines.append(str(variable))
            case Command():
                if node.docstring:
                    lines.extend(helper.new_docstring(node.docstring))
                lines.append(helper.new_function(node.name, self._command_parameters(node), node.return_type))
            case Tree() | ArrayTree():
                key = helper.quote_name(node.name)
                if not node.children:
                    lines.append(f"{key}: {{}}")
                else:
                    lines.append(f"{key}: {{")
                    lines.extend(helper.indent(self._body_lines(node.children, TREE_SEPARATOR)))
                    lines.append("}")
        return lines

    def _command_parameters(self, command: Command) -> list[helper.TypedVariable]:
        parameters: list[helper.TypedVariable] = []
        if command.args is not None:
            parameters.append(helper.TypedVariable("args", command.args.name, optional=command.optional_args))
        if command.multiline:
            parameters.append(helper.TypedVariable("body", xapi_types.MULTILINE_BODY_TYPE))
        return parameters


_writer = Writer()


def serialize(node: Node) -> str:
    """Render a node with the default writer.

    Args:
        node (Node): The node to render.

    Returns:
        str: The declaration text.
    """
    return _writer.render(node)
