"""
Interactive backend built on prompt_toolkit.

Provides line editing, a colored prompt, history navigation over the mode's
history and completion bound to a configurable key.
"""

import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings

from .base import Backend
from ..commands.completion import CompletionRegistry
from ..commands.types import CompletionResult


class RegistryCompleter(Completer):
    """Offers every registry entry matching the text before the cursor."""

    def __init__(self, registry: CompletionRegistry):
        self.registry = registry

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        for match in self.registry.matches(text):
            yield Completion(match, start_position=-len(text))


class PromptToolkitBackend(Backend):
    """Line-editing backend for interactive terminals.

    The prompt_toolkit session is created on first use, so constructing a
    backend (and therefore a mode) does not require a terminal.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._session: Optional[PromptSession] = None

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession(
                history=self.history_store,
                completer=RegistryCompleter(self.completer),
                complete_while_typing=False,
                key_bindings=self._create_key_bindings(),
            )
        return self._session

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add(self.completion_key)
        def _(event):
            buffer = event.current_buffer
            text = buffer.document.text_before_cursor
            result, completion = self.completer.complete(text)
            if result is CompletionResult.NO_HANDLER:
                # no selection callback, let the user pick from the menu
                buffer.start_completion(select_first=False)
            elif result is CompletionResult.COMPLETED and completion:
                buffer.delete_before_cursor(len(text))
                buffer.insert_text(completion)
            else:
                event.app.output.bell()

        return kb

    def read_line(self) -> Optional[str]:
        try:
            return self.session.prompt(ANSI(self.prompt))
        except EOFError:
            return None
        except KeyboardInterrupt:
            # Ctrl-C discards the current line
            return ""

    def read_char(self) -> Optional[str]:
        c = sys.stdin.read(1)
        return c or None

    def reset(self) -> None:
        sys.stdout.flush()
