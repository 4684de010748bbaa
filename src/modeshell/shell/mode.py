"""
Modes: independent command namespaces.

Each mode owns a command tree, the completion registry fed by that tree and
a backend carrying its own prompt and history.
"""

from typing import Callable, Iterable, Optional, Tuple

from ..backends.base import Backend
from ..commands.completion import CompletionRegistry
from ..commands.node import CommandNode
from ..commands.types import CommandHandler, CompletionCallback, ExecutionOutcome


BackendFactory = Callable[..., Backend]

# (name, description, handler) as accepted by Mode.add_all
CommandClause = Tuple[str, str, Optional[CommandHandler]]


class Mode:
    """A command-line context with its own commands, history and prompt."""

    def __init__(self,
                 name: str,
                 backend_factory: BackendFactory,
                 prompt: str = "> ",
                 prompt_color: Optional[str] = None,
                 history_file: Optional[str] = None,
                 history_size: int = 1000,
                 unique_history: bool = True,
                 shell_name: str = "modeshell",
                 completion_key: str = "tab"):
        self.completion = CompletionRegistry()
        self.backend = backend_factory(
            shell_name=shell_name,
            history_file=history_file,
            history_size=history_size,
            unique_history=unique_history,
            completion_key=completion_key,
            completer=self.completion,
        )
        self.backend.set_prompt(prompt, prompt_color)
        self.root = CommandNode(name, completion=self.completion)

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def prompt(self) -> str:
        return self.backend.prompt

    def set_prompt(self, prompt: str, color: Optional[str] = None) -> None:
        self.backend.set_prompt(prompt, color)

    def add(self, name: str, description: str = "",
            handler: Optional[CommandHandler] = None) -> Optional[CommandNode]:
        """Add a top-level command; None if the name is empty or taken."""
        return self.root.add(name, description, handler)

    def add_all(self, clauses: Iterable[CommandClause]) -> None:
        """Add several top-level commands from (name, description, handler) triples."""
        for name, description, handler in clauses:
            self.add(name, description, handler)

    def on_unknown_command(self, handler: Optional[CommandHandler]) -> None:
        """Handle lines whose first token names no command."""
        self.root.set_handler(handler)

    def on_complete(self, callback: Optional[CompletionCallback]) -> None:
        self.completion.set_callback(callback)

    def add_completion(self, entry: str) -> bool:
        return self.completion.add(entry)

    def replace_completions(self, entries: Iterable[str]) -> None:
        self.completion.replace(entries)

    def execute(self, line: str) -> ExecutionOutcome:
        return self.root.execute(line)

    def help(self, indent: int = 0) -> str:
        return self.root.help(indent)

    def __repr__(self) -> str:
        return f"Mode({self.name!r}, commands={len(self.root.children)})"
