"""
Mode-based command line dispatcher.

The dispatcher owns any number of named modes and a stack of active ones.
Input lines go through the preprocessor pipeline and are then executed by
the mode on top of the stack. Pushing a mode switches the prompt, history
and command set; popping returns to the previous mode.
"""

from typing import Callable, Dict, List, Optional, Tuple

from .mode import BackendFactory, Mode
from ..backends.prompt_toolkit_backend import PromptToolkitBackend
from ..commands.types import CommandResult
from ..config.models import ShellConfig
from ..preprocessing.pipeline import Preprocessor, PreprocessorPipeline
from ..utils.error_handling import ModeStackError, PreprocessorError
from ..utils.logging import get_logger


ErrorCallback = Callable[[str, str], None]


class Dispatcher:
    """Routes input lines to the active mode.

    Typical use:

        dispatcher = Dispatcher()
        main = dispatcher.mode_add("main", "> ")
        main.add("quit", "leave the shell", lambda args: dispatcher.stop())
        dispatcher.mode_push("main")
        dispatcher.run()
    """

    def __init__(self, config: Optional[ShellConfig] = None,
                 backend_factory: Optional[BackendFactory] = None):
        """
        Args:
            config: Shell configuration supplying mode defaults
            backend_factory: Called with the backend keyword arguments to
                create each mode's backend; PromptToolkitBackend by default
        """
        self.config = config or ShellConfig()
        self.logger = get_logger(__name__)
        self._backend_factory = backend_factory or PromptToolkitBackend
        self._modes: Dict[str, Mode] = {}
        self._stack: List[Mode] = []
        self._preprocessors = PreprocessorPipeline()
        self._last_error = ""
        self._running = False

    @property
    def last_error(self) -> str:
        """Error message of the most recent failed :meth:`process` call."""
        return self._last_error

    @property
    def modes(self) -> Dict[str, Mode]:
        return dict(self._modes)

    @property
    def stack(self) -> Tuple[Mode, ...]:
        """Active modes, bottom first."""
        return tuple(self._stack)

    @property
    def preprocessors(self) -> PreprocessorPipeline:
        return self._preprocessors

    def mode(self, name: str) -> Optional[Mode]:
        return self._modes.get(name)

    def mode_add(self, name: str,
                 prompt: Optional[str] = None,
                 color: Optional[str] = None,
                 history_file: Optional[str] = None) -> Optional[Mode]:
        """Create a new mode.

        Prompt, color and history file default to the configuration.

        Returns:
            The new mode, or None if a mode with this name already exists
        """
        if name in self._modes:
            self.logger.debug(f"Mode {name!r} already exists")
            return None

        mode = Mode(
            name,
            self._backend_factory,
            prompt=prompt if prompt is not None else self.config.prompt.text,
            prompt_color=color if color is not None else self.config.prompt.color,
            history_file=history_file if history_file is not None else self.config.history.file_for(name),
            history_size=self.config.history.size,
            unique_history=self.config.history.unique,
            shell_name=self.config.app.name,
            completion_key=self.config.completion.key,
        )
        self._modes[name] = mode
        self.logger.debug(f"Added mode {name!r}")
        return mode

    def mode_rm(self, name: str) -> bool:
        """Remove a mode.

        Returns:
            False if the mode does not exist or is on the mode stack
        """
        mode = self._modes.get(name)
        if mode is None:
            return False
        if any(active is mode for active in self._stack):
            self.logger.debug(f"Refusing to remove active mode {name!r}")
            return False
        del self._modes[name]
        self.logger.debug(f"Removed mode {name!r}")
        return True

    def mode_push(self, name: str) -> bool:
        """Enter a mode; False if there is no mode with this name."""
        mode = self._modes.get(name)
        if mode is None:
            return False
        self._stack.append(mode)
        self.logger.debug(f"Entered mode {name!r} (depth {len(self._stack)})")
        return True

    def mode_pop(self) -> bool:
        """Leave the current mode; False if the stack is empty."""
        if not self._stack:
            return False
        mode = self._stack.pop()
        self.logger.debug(f"Left mode {mode.name!r} (depth {len(self._stack)})")
        return True

    def has_mode(self) -> bool:
        return bool(self._stack)

    def current_mode(self) -> Mode:
        """The mode on top of the stack.

        Raises:
            ModeStackError: No mode is active
        """
        if not self._stack:
            raise ModeStackError("mode stack is empty")
        return self._stack[-1]

    def add_preprocessor(self, preprocessor: Preprocessor) -> None:
        """Append a preprocessor; preprocessors run in the order they were added."""
        self._preprocessors.add(preprocessor)

    def process(self, line: str) -> CommandResult:
        """Preprocess and execute a single input line.

        Returns:
            NOP for an empty line, EXECUTED if a handler ran or a preprocessor
            consumed the line, NO_COMMAND otherwise (see :attr:`last_error`)
        """
        if not line:
            return CommandResult.NOP

        if not self._stack:
            self._last_error = "mode stack is empty"
            return CommandResult.NO_COMMAND

        if self._preprocessors:
            try:
                text = self._preprocessors.run(line)
            except PreprocessorError as e:
                self._last_error = e.message
                return CommandResult.NO_COMMAND
            if text is None:
                return CommandResult.EXECUTED
            line = text

        result, error = self._stack[-1].execute(line)
        if result is CommandResult.NO_COMMAND:
            self._last_error = error
        return result

    def append_to_history(self, entry: str) -> bool:
        """Record and save a history entry for the current mode.

        Returns:
            False if no mode is active
        """
        if not self._stack:
            return False
        backend = self._stack[-1].backend
        backend.history_enter(entry)
        backend.history_save()
        return True

    def read_line(self) -> Optional[str]:
        """Read a line through the current mode's backend.

        Returns:
            The line with surrounding whitespace removed, or None if no mode
            is active or input has ended
        """
        if not self._stack:
            return None
        backend = self._stack[-1].backend
        backend.reset()
        line = backend.read_line()
        if line is None:
            return None
        return line.strip()

    def read_char(self) -> Optional[str]:
        if not self._stack:
            return None
        return self._stack[-1].backend.read_char()

    def run(self, on_error: Optional[ErrorCallback] = None, record_history: bool = True) -> None:
        """Read and process lines until input ends or :meth:`stop` is called.

        Args:
            on_error: Called with the line and :attr:`last_error` for every
                line that fails; failures are logged when omitted
            record_history: Append each non-empty line to the current
                mode's history before processing it
        """
        self._running = True
        while self._running:
            line = self.read_line()
            if line is None:
                break
            if line and record_history:
                self.append_to_history(line)
            if self.process(line) is CommandResult.NO_COMMAND:
                if on_error is not None:
                    on_error(line, self._last_error)
                else:
                    self.logger.warning(self._last_error)
        self._running = False

    def stop(self) -> CommandResult:
        """Make :meth:`run` return after the current line.

        Returns EXECUTED so it can serve directly as a command handler's
        return value.
        """
        self._running = False
        return CommandResult.EXECUTED
