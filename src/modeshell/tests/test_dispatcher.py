"""
Test suite for modes and the dispatcher.

This module tests mode management, the mode stack, line processing through
preprocessors and the read/dispatch loop driven by a stream backend.
"""

import io

import pytest
from prompt_toolkit.history import FileHistory

from modeshell.backends.stream import StreamBackend
from modeshell.commands.completion import longest_common_prefix
from modeshell.commands.types import CommandResult
from modeshell.config.models import ShellConfig
from modeshell.preprocessing.variables import VariablesEngine
from modeshell.shell.dispatcher import Dispatcher
from modeshell.shell.mode import Mode
from modeshell.utils.error_handling import ModeStackError, PreprocessorError


@pytest.mark.unit
class TestMode:
    """Test a single mode."""

    def setup_method(self):
        self.mode = Mode("main", StreamBackend, prompt="main> ", prompt_color="bold_green")

    def test_name_and_prompt(self):
        assert self.mode.name == "main"
        assert self.mode.backend.prompt_text == "main> "
        assert self.mode.prompt == "\033[1m\033[32mmain> \033[0m"

    def test_set_prompt(self):
        self.mode.set_prompt("other> ")

        assert self.mode.prompt == "other> "

    def test_commands_feed_backend_completer(self):
        self.mode.add("show", "display information")
        self.mode.on_complete(longest_common_prefix)

        assert self.mode.backend.completer is self.mode.completion
        assert self.mode.backend.complete("sh") == "show "

    def test_add_all(self):
        self.mode.add_all([
            ("echo", "print the arguments", lambda args: None),
            ("quit", "leave", lambda args: None),
        ])

        assert [child.name for child in self.mode.root.children] == ["echo", "quit"]
        assert self.mode.help() == "echo  print the arguments\nquit  leave\n"

    def test_unknown_command_handler(self):
        seen = []
        self.mode.on_unknown_command(lambda args: seen.append(args))

        assert self.mode.execute("anything goes") == (CommandResult.EXECUTED, "")
        assert seen == ["anything goes"]

    def test_completion_management(self):
        self.mode.add("show")

        assert self.mode.add_completion("extra") is True
        assert self.mode.add_completion("extra") is False

        self.mode.replace_completions(["only"])
        assert self.mode.completion.entries == ("only",)


@pytest.mark.unit
class TestModeManagement:
    """Test adding, removing and stacking modes."""

    def setup_method(self):
        self.shell = Dispatcher(ShellConfig(), StreamBackend)

    def test_mode_add(self):
        mode = self.shell.mode_add("main", "> ")

        assert isinstance(mode, Mode)
        assert self.shell.mode("main") is mode
        assert list(self.shell.modes) == ["main"]

    def test_mode_add_duplicate(self):
        self.shell.mode_add("main")

        assert self.shell.mode_add("main") is None

    def test_mode_add_uses_configured_defaults(self):
        config = ShellConfig(prompt={"text": "cfg> ", "color": "red"}, history={"size": 3, "unique": False})
        shell = Dispatcher(config, StreamBackend)

        backend = shell.mode_add("main").backend

        assert backend.prompt_text == "cfg> "
        assert backend.prompt_color == "red"
        assert backend.history_size == 3
        assert backend.unique_history is False

    def test_history_file_from_configured_directory(self, tmp_path):
        config = ShellConfig(history={"directory": str(tmp_path)})
        shell = Dispatcher(config, StreamBackend)

        backend = shell.mode_add("main").backend

        assert backend.history_file == tmp_path / "main.history"

    def test_push_and_pop(self):
        self.shell.mode_add("main")
        self.shell.mode_add("config")

        assert not self.shell.has_mode()
        assert self.shell.mode_push("main")
        assert self.shell.mode_push("config")
        assert self.shell.current_mode().name == "config"
        assert [mode.name for mode in self.shell.stack] == ["main", "config"]

        assert self.shell.mode_pop()
        assert self.shell.current_mode().name == "main"
        assert self.shell.mode_pop()
        assert not self.shell.mode_pop()

    def test_push_unknown_mode(self):
        assert self.shell.mode_push("nope") is False
        assert not self.shell.has_mode()

    def test_same_mode_can_be_pushed_twice(self):
        self.shell.mode_add("main")
        self.shell.mode_push("main")
        self.shell.mode_push("main")

        assert len(self.shell.stack) == 2

    def test_current_mode_with_empty_stack(self):
        with pytest.raises(ModeStackError, match="mode stack is empty"):
            self.shell.current_mode()

    def test_mode_rm(self):
        self.shell.mode_add("main")

        assert self.shell.mode_rm("main") is True
        assert self.shell.mode("main") is None
        assert self.shell.mode_rm("main") is False

    def test_mode_rm_refuses_active_mode(self):
        self.shell.mode_add("main")
        self.shell.mode_add("config")
        self.shell.mode_push("main")
        self.shell.mode_push("config")

        assert self.shell.mode_rm("main") is False
        assert self.shell.mode("main") is not None

        self.shell.mode_pop()
        self.shell.mode_pop()
        assert self.shell.mode_rm("main") is True


@pytest.mark.unit
class TestProcess:
    """Test processing of single lines."""

    def test_empty_line_is_nop(self, dispatcher):
        assert dispatcher.process("") is CommandResult.NOP

    def test_empty_line_with_empty_stack_is_nop(self, make_dispatcher):
        assert make_dispatcher().process("") is CommandResult.NOP

    def test_line_with_empty_stack(self, make_dispatcher):
        shell = make_dispatcher()

        assert shell.process("quit") is CommandResult.NO_COMMAND
        assert shell.last_error == "mode stack is empty"

    def test_executes_in_current_mode(self, dispatcher):
        seen = []
        dispatcher.current_mode().add("echo", "", lambda args: seen.append(args))

        assert dispatcher.process("echo hi") is CommandResult.EXECUTED
        assert seen == ["hi"]

    def test_unknown_command_sets_last_error(self, dispatcher):
        assert dispatcher.process("bogus") is CommandResult.NO_COMMAND
        assert dispatcher.last_error == "bogus: command not found"

    def test_last_error_kept_after_success(self, dispatcher):
        dispatcher.current_mode().add("ok", "", lambda args: None)
        dispatcher.process("bogus")
        dispatcher.process("ok")

        assert dispatcher.last_error == "bogus: command not found"

    def test_modes_have_separate_commands(self, dispatcher):
        config = dispatcher.mode_add("config")
        config.add("set", "", lambda args: None)
        dispatcher.current_mode().add("show", "", lambda args: None)

        assert dispatcher.process("set x") is CommandResult.NO_COMMAND
        dispatcher.mode_push("config")
        assert dispatcher.process("set x") is CommandResult.EXECUTED
        assert dispatcher.process("show") is CommandResult.NO_COMMAND

    def test_preprocessor_rewrites_line(self, dispatcher):
        seen = []
        dispatcher.current_mode().add("echo", "", lambda args: seen.append(args))
        dispatcher.add_preprocessor(VariablesEngine({"x": "1"}))

        dispatcher.process("echo $x")

        assert seen == ["1"]

    def test_consumed_line_is_executed(self, dispatcher):
        engine = VariablesEngine()
        dispatcher.add_preprocessor(engine)

        assert dispatcher.process("a=1") is CommandResult.EXECUTED
        assert engine.get("a") == "1"

    def test_leading_space_assignment_reaches_mode(self, dispatcher):
        dispatcher.add_preprocessor(VariablesEngine())

        assert dispatcher.process(" a=1") is CommandResult.NO_COMMAND

    def test_preprocessor_error(self, dispatcher):
        seen = []
        dispatcher.current_mode().on_unknown_command(lambda args: seen.append(args))
        dispatcher.add_preprocessor(VariablesEngine())

        assert dispatcher.process("$") is CommandResult.NO_COMMAND
        assert dispatcher.last_error == "syntax error at position 1: $ at end of line"
        assert seen == []

    def test_custom_preprocessor_error(self, dispatcher):
        def reject(line):
            raise PreprocessorError("no shouting")

        dispatcher.add_preprocessor(reject)

        assert dispatcher.process("LOUD") is CommandResult.NO_COMMAND
        assert dispatcher.last_error == "no shouting"
        assert len(dispatcher.preprocessors) == 1

    def test_stop_returns_executed(self, dispatcher):
        assert dispatcher.stop() is CommandResult.EXECUTED


@pytest.mark.integration
class TestRun:
    """Test the read/dispatch loop."""

    def test_reads_until_end_of_input(self, make_dispatcher):
        shell = make_dispatcher("echo one\n\necho two\n")
        seen = []
        shell.mode_add("main").add("echo", "", lambda args: seen.append(args))
        shell.mode_push("main")

        shell.run()

        assert seen == ["one", "two"]

    def test_quit_stops_loop(self, make_dispatcher):
        shell = make_dispatcher("quit\necho never\n")
        seen = []
        main = shell.mode_add("main")
        main.add("quit", "", lambda args: shell.stop())
        main.add("echo", "", lambda args: seen.append(args))
        shell.mode_push("main")

        shell.run()

        assert seen == []
        assert shell.read_line() == "echo never"

    def test_errors_reported(self, make_dispatcher):
        shell = make_dispatcher("bogus\n  \nquit\n")
        errors = []
        shell.mode_add("main").add("quit", "", lambda args: shell.stop())
        shell.mode_push("main")

        shell.run(on_error=lambda line, error: errors.append((line, error)))

        assert errors == [("bogus", "bogus: command not found")]

    def test_errors_logged_without_callback(self, make_dispatcher, caplog):
        shell = make_dispatcher("bogus\n")
        shell.mode_add("main")
        shell.mode_push("main")

        with caplog.at_level("WARNING", logger="modeshell.shell.dispatcher"):
            shell.run()

        assert "bogus: command not found" in caplog.text

    def test_lines_stripped_and_recorded(self, make_dispatcher):
        shell = make_dispatcher("  echo hi  \necho hi\n\n")
        seen = []
        shell.mode_add("main").add("echo", "", lambda args: seen.append(args))
        shell.mode_push("main")

        shell.run()

        assert seen == ["hi", "hi"]
        assert shell.current_mode().backend.history == ("echo hi",)

    def test_history_not_recorded_when_disabled(self, make_dispatcher):
        shell = make_dispatcher("echo hi\n")
        shell.mode_add("main").add("echo", "", lambda args: None)
        shell.mode_push("main")

        shell.run(record_history=False)

        assert shell.current_mode().backend.history == ()

    def test_history_follows_mode(self, make_dispatcher):
        shell = make_dispatcher("enter\nshow\nquit\nshow\n")
        main = shell.mode_add("main")
        sub = shell.mode_add("sub")
        main.add("enter", "", lambda args: shell.mode_push("sub") and None)
        main.add("show", "", lambda args: None)
        sub.add("show", "", lambda args: None)
        sub.add("quit", "", lambda args: shell.mode_pop() and None)
        shell.mode_push("main")

        shell.run()

        assert main.backend.history == ("enter", "show")
        assert sub.backend.history == ("show", "quit")

    def test_history_saved_to_file(self, tmp_path, stream_factory):
        config = ShellConfig(history={"directory": str(tmp_path)})
        shell = Dispatcher(config, stream_factory("echo hi\n"))
        shell.mode_add("main").add("echo", "", lambda args: None)
        shell.mode_push("main")

        shell.run()

        assert list(FileHistory(str(tmp_path / "main.history")).load_history_strings()) == ["echo hi"]

    def test_read_without_mode(self, make_dispatcher):
        shell = make_dispatcher("echo\n")

        assert shell.read_line() is None
        assert shell.read_char() is None
        assert shell.append_to_history("echo") is False

    def test_read_char(self, make_dispatcher):
        shell = make_dispatcher("yn")
        shell.mode_add("main")
        shell.mode_push("main")

        assert shell.read_char() == "y"
        assert shell.read_char() == "n"
        assert shell.read_char() is None

    def test_prompt_written_to_output(self, make_dispatcher):
        output = io.StringIO()
        shell = make_dispatcher("quit\n", output=output)
        shell.mode_add("main", "main> ").add("quit", "", lambda args: shell.stop())
        shell.mode_push("main")

        shell.run()

        assert output.getvalue() == "main> "
