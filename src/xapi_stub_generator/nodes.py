"""Declaration nodes that make up a generated document.

The node set is closed: type expressions (`Plain`, `Literal`, `List`, `Generic`) and
declarations (`Member`, `Command`, `Tree`, `ArrayTree`, `Interface`, `MainClass`,
`ImportStatement`, `Builtins`, `Root`). Rendering lives in `writer.Writer`, which
matches on these classes.

Nodes compare structurally, so a tree built by the parser can be compared against a
tree built by hand.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from xapi_stub_generator import xapi_types
from xapi_stub_generator.errors import (
    DuplicateDeclarationError,
    MissingBaseError,
    NotFoundError,
    SingleInstanceViolationError,
)

logger = logging.getLogger(__name__)

BUILTIN_INTERFACE_NAMES = ("Gettable", "Settable", "Listenable")


# ===== Type expressions =====


@dataclass(frozen=True)
class Plain:
    """A primitive or declared type, referenced by name."""

    name: str


@dataclass(frozen=True, init=False)
class Literal:
    """A union of string constants, e.g. `'On' | 'Off'`."""

    values: tuple[str, ...]

    def __init__(self, *values: str):
        if not values:
            raise ValueError("A literal type needs at least one value.")
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class List:
    """A homogeneous array of another type expression."""

    element: TypeExpression


@dataclass(frozen=True, init=False)
class Generic:
    """A type alias applied to an interface, e.g. `Configify<ConfigTree>`."""

    alias: str
    interface: str

    def __init__(self, alias: str, interface: str | Interface):
        object.__setattr__(self, "alias", alias)
        object.__setattr__(self, "interface", interface.name if isinstance(interface, Interface) else interface)


TypeExpression = Plain | Literal | List | Generic


def as_type(value: str | TypeExpression | Interface) -> TypeExpression:
    """Coerce a type given by name or by interface into a type expression.

    Args:
        value (str | TypeExpression | Interface): A type name, a type expression or an interface node.

    Returns:
        TypeExpression: The type expression.
    """
    if isinstance(value, str):
        return Plain(value)
    if isinstance(value, Interface):
        return Plain(value.name)
    return value


# ===== Declarations =====


@dataclass
class Member:
    """A named field with a type, e.g. `Volume?: number`."""

    name: str
    type: TypeExpression
    required: bool = True
    docstring: str | None = None

    def __post_init__(self):
        self.type = as_type(self.type)

    def serialize(self) -> str:
        return _serialize(self)


@dataclass
class Command:
    """A callable command, optionally taking an args interface."""

    name: str
    args: Interface | None = None
    return_type: str = xapi_types.DEFAULT_RETURN_TYPE
    docstring: str | None = None
    multiline: bool = False

    @property
    def optional_args(self) -> bool:
        """Whether the args parameter may be omitted.

        This is the case if every direct member of the args interface is optional.
        Multiline commands always take their args, since the body follows them.
        """
        if self.args is None or self.multiline:
            return False
        return all(isinstance(child, Member) and not child.required for child in self.args.children)

    def serialize(self) -> str:
        return _serialize(self)


N = TypeVar("N", bound="Member | Command | Tree | ArrayTree")


@dataclass
class _Container:
    """Common behaviour of nodes that own an ordered list of children."""

    children: list[Member | Command | Tree | ArrayTree] = field(default_factory=list, kw_only=True)

    def add_child(self, child: N) -> N:
        """Append a child and return it, so calls can be chained down a tree.

        Args:
            child: The child node.

        Returns:
            The appended child.
        """
        self.children.append(child)
        return child

    def add_children(self, children: Iterable[Member | Command | Tree | ArrayTree]):
        """Append several children in order.

        Args:
            children: The child nodes.

        Returns:
            The container itself.
        """
        self.children.extend(children)
        return self

    def serialize(self) -> str:
        return _serialize(self)


@dataclass
class Tree(_Container):
    """A nested namespace, rendered as an object type."""

    name: str


@dataclass
class ArrayTree(_Container):
    """A keyed collection of the schema. Rendered like a `Tree`."""

    name: str


@dataclass
class Interface(_Container):
    """An exported interface declaration."""

    name: str
    bases: list[str] = field(default_factory=list)


@dataclass
class MainClass(_Container):
    """The typed client class, plus the same-named interface that holds its members."""

    name: str = xapi_types.DEFAULT_MAIN_NAME
    base: str = xapi_types.DEFAULT_BASE_NAME
    with_connect: bool = True
    with_default: bool = True


@dataclass
class ImportStatement:
    """An import of named symbols from a module."""

    module: str = xapi_types.DEFAULT_LIB_NAME
    names: tuple[str, ...] = (xapi_types.DEFAULT_BASE_NAME, xapi_types.CONNECT_GENERATOR_NAME)

    def __post_init__(self):
        self.names = tuple(self.names)

    def serialize(self) -> str:
        return _serialize(self)


@dataclass
class Builtins:
    """The fixed generic interfaces and type aliases used by config and status trees."""

    def serialize(self) -> str:
        return _serialize(self)


Declaration = Interface | MainClass | ImportStatement | Builtins


@dataclass
class Root:
    """The document.

    The first child is always the import statement. Interface names are unique within
    a document and the document holds at most one main class.
    """

    lib_name: str = xapi_types.DEFAULT_LIB_NAME
    children: list[Declaration] = field(init=False)
    _interfaces: dict[str, Interface] = field(init=False, repr=False, compare=False)
    _main: MainClass | None = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        self.children = [ImportStatement(self.lib_name)]
        self._interfaces = {}

    @property
    def import_statement(self) -> ImportStatement:
        """The import statement of the document."""
        statement = self.children[0]
        assert isinstance(statement, ImportStatement)
        return statement

    @property
    def interfaces(self) -> dict[str, Interface]:
        """All registered interfaces by name, in order of registration."""
        return dict(self._interfaces)

    def _is_declared(self, name: str) -> bool:
        # The main class also emits an interface of its own name.
        return name in self._interfaces or (self._main is not None and self._main.name == name)

    def add_interface(self, name: str, bases: Sequence[str] = ()) -> Interface:
        """Create and register a new interface.

        Args:
            name (str): The interface name, unique within the document.
            bases (Sequence[str], optional): Names of registered interfaces to extend. Defaults to ().

        Raises:
            DuplicateDeclarationError: If the name is already registered.
            MissingBaseError: If any of the bases is not registered.

        Returns:
            Interface: The new interface.
        """
        if self._is_declared(name):
            raise DuplicateDeclarationError(name)

        missing = [base for base in bases if base not in self._interfaces]
        if missing:
            raise MissingBaseError(name, missing)

        interface = Interface(name, list(bases))
        self._interfaces[name] = interface
        self.children.append(interface)
        logger.debug("Added interface '%s'.", name)
        return interface

    def add_main(
        self,
        name: str = xapi_types.DEFAULT_MAIN_NAME,
        *,
        base: str = xapi_types.DEFAULT_BASE_NAME,
        with_connect: bool = True,
    ) -> MainClass:
        """Create the main class of the document.

        The import statement is updated to import the base class, and the connect
        generator if a connect export is requested.

        Args:
            name (str, optional): The class name. Defaults to "TypedXAPI".
            base (str, optional): The extended class. Defaults to "XAPI".
            with_connect (bool, optional): Whether to export `connect`. Defaults to True.

        Raises:
            SingleInstanceViolationError: If a main class already exists.
            DuplicateDeclarationError: If an interface with the same name is registered.

        Returns:
            MainClass: The main class.
        """
        if self._main is not None:
            raise SingleInstanceViolationError(name)
        if self._is_declared(name):
            raise DuplicateDeclarationError(name)

        main = MainClass(name=name, base=base, with_connect=with_connect)
        self._main = main
        self.children.append(main)

        names = [base]
        if with_connect:
            names.append(xapi_types.CONNECT_GENERATOR_NAME)
        self.import_statement.names = tuple(names)

        return main

    def get_main(self) -> MainClass:
        """Return the main class.

        Raises:
            NotFoundError: If no main class was added.
        """
        if self._main is None:
            raise NotFoundError("main class")
        return self._main

    def add_generic_interfaces(self) -> Builtins:
        """Add the builtin generic interfaces and type aliases.

        `Gettable`, `Settable` and `Listenable` are registered, so that other
        interfaces can extend them. The declarations directly follow the import.

        Raises:
            DuplicateDeclarationError: If one of the builtin names is already registered.
        """
        for name in BUILTIN_INTERFACE_NAMES:
            if self._is_declared(name):
                raise DuplicateDeclarationError(name)

        builtins = Builtins()
        for name in BUILTIN_INTERFACE_NAMES:
            self._interfaces[name] = Interface(name)
        self.children.insert(1, builtins)
        return builtins

    def serialize(self) -> str:
        return _serialize(self)


Node = TypeExpression | Member | Command | Tree | ArrayTree | Interface | MainClass | ImportStatement | Builtins | Root


def _serialize(node: Node) -> str:
    from xapi_stub_generator.writer import serialize

    return serialize(node)
