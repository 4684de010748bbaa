"""
Hierarchical command tree.

A command line such as ``"config set name value"`` is dispatched by walking
the tree one space-separated token at a time. The deepest node reached gets
the remaining text (``"name value"``) as its argument string.
"""

from typing import List, Optional, Tuple

from .completion import CompletionRegistry
from .types import CommandHandler, CommandResult, ExecutionOutcome
from ..utils.error_handling import CommandError
from ..utils.logging import get_logger


logger = get_logger(__name__)


class CommandNode:
    """One command in a mode's namespace tree.

    Nodes are only ever created through :meth:`add` on their parent, which
    keeps sibling names unique and registers the new command with the
    completion registry shared by the whole tree. A node without a parent is
    the root of its tree; its name does not take part in dispatch.
    """

    def __init__(self, name: str, description: str = "",
                 completion: Optional[CompletionRegistry] = None,
                 parent: Optional["CommandNode"] = None):
        self._name = name
        self._description = description
        self._parent = parent
        self._completion = completion if completion is not None else CompletionRegistry()
        self._children: List["CommandNode"] = []
        self._handler: Optional[CommandHandler] = None

        if not self.is_root:
            self._completion.add(self.absolute_name() + " ")

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parent(self) -> Optional["CommandNode"]:
        return self._parent

    @property
    def handler(self) -> Optional[CommandHandler]:
        return self._handler

    @property
    def completion(self) -> CompletionRegistry:
        return self._completion

    @property
    def children(self) -> Tuple["CommandNode", ...]:
        return tuple(self._children)

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def add(self, name: str, description: str = "",
            handler: Optional[CommandHandler] = None) -> Optional["CommandNode"]:
        """Add a sub-command.

        Args:
            name: Command name, a single token
            description: One-line description shown by :meth:`help`
            handler: Optional handler for the command's arguments

        Returns:
            The new node, or None if name is empty or already taken by a sibling
        """
        if not name or any(child.name == name for child in self._children):
            logger.debug(f"Refusing to add command {name!r} below {self.absolute_name()!r}")
            return None

        child = CommandNode(name, description, self._completion, parent=self)
        if handler is not None:
            child.set_handler(handler)
        self._children.append(child)
        logger.debug(f"Added command {child.absolute_name()!r}")
        return child

    def add_copy(self, other: "CommandNode") -> Optional["CommandNode"]:
        """Add a sub-command with the name, description and handler of other.

        Sub-commands of other are not copied.
        """
        return self.add(other.name, other.description, other.handler)

    def set_handler(self, handler: Optional[CommandHandler]) -> None:
        """Replace the handler invoked for this command's arguments."""
        self._handler = handler

    on = set_handler

    def find(self, path: str) -> Optional["CommandNode"]:
        """Look up a descendant by its space-separated path relative to this node."""
        node = self
        for token in path.split(" "):
            node = next((child for child in node._children if child.name == token), None)
            if node is None:
                return None
        return node

    def absolute_name(self) -> str:
        """Space-separated command path from the root to this node."""
        if self.is_root:
            return ""
        names = []
        node = self
        while not node.is_root:
            names.append(node.name)
            node = node.parent
        return " ".join(reversed(names))

    def help(self, indent: int = 0) -> str:
        """Aligned ``name  description`` listing of the direct sub-commands."""
        if not self._children:
            return ""
        width = max(len(child.name) for child in self._children)
        padding = " " * indent
        return "".join(
            f"{padding}{child.name.ljust(width)}  {child.description}\n"
            for child in self._children
        )

    def execute(self, line: str) -> ExecutionOutcome:
        """Dispatch line, the input remaining below this node.

        The text up to the first space is matched exactly against the
        sub-command names. A match recurses with the rest of the line, so
        sub-commands always win over this node's own handler, which only
        sees lines whose first token names no sub-command.

        Returns:
            ``(result, error)`` where error is empty unless result is NO_COMMAND
        """
        if self.is_root and not line:
            return CommandResult.NOP, ""

        token, _, rest = line.partition(" ")
        for child in self._children:
            if child.name == token:
                return child.execute(rest)

        if self._handler is not None:
            return self._invoke(token, line)

        return CommandResult.NO_COMMAND, self._not_found(token)

    def _invoke(self, token: str, args: str) -> ExecutionOutcome:
        try:
            result = self._handler(args)
        except CommandError as e:
            logger.debug(f"Command {self.absolute_name()!r} rejected {args!r}: {e.message}")
            return CommandResult.NO_COMMAND, e.message

        if result is None:
            result = CommandResult.EXECUTED
        if result is CommandResult.NO_COMMAND:
            return result, self._not_found(token)
        return result, ""

    def _not_found(self, token: str) -> str:
        # an empty token below the root means the sub-command was left out
        return f"{token or self.absolute_name()}: command not found"

    def __repr__(self) -> str:
        return f"CommandNode({self.absolute_name() or self._name!r}, children={len(self._children)})"
