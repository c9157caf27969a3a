from __future__ import annotations

from dataclasses import dataclass, field

from xapi_stub_generator import helper, xapi_types
from xapi_stub_generator.nodes import ArrayTree, Interface, Root, Tree


@dataclass(frozen=True)
class ParseOptions:
    """Options that control the shape of the generated document.

    Attributes:
        xapi_import: Module to import the base class and connect generator from.
        class_name: Name of the generated main class and interface.
        base: Name of the extended base class.
        with_connect: Whether to export a `connect` function for the main class.
    """

    xapi_import: str = xapi_types.DEFAULT_LIB_NAME
    class_name: str = xapi_types.DEFAULT_MAIN_NAME
    base: str = xapi_types.DEFAULT_BASE_NAME
    with_connect: bool = True


@dataclass
class TreeContext:
    """Where the parser currently is while descending into a schema family.

    Attributes:
        root: The document being built.
        container: The node that receives the children found at this level.
        path: Keys from the family key down to this level, e.g. ["Command", "Audio"].
    """

    root: Root
    container: Interface | Tree | ArrayTree
    path: list[str] = field(default_factory=list)

    def descend(self, container: Interface | Tree | ArrayTree, key: str) -> TreeContext:
        """Create the context for a child level.

        Args:
            container: The node that receives the children of the child level.
            key: The key of the child level.

        Returns:
            TreeContext: The child context.
        """
        return TreeContext(root=self.root, container=container, path=[*self.path, key])

    def args_name(self, command_name: str) -> str:
        """Name of the args interface of a command at this level.

        E.g. a `Display` command at `Command/Message/Alert` gets `CommandMessageAlertDisplayArgs`.
        """
        return "".join(helper.sanitize_name(part) for part in [*self.path, command_name]) + "Args"
