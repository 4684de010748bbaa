"""
Demo shell assembled from the modeshell building blocks.

The demo has two modes. ``main`` offers echo, help, variable management and
``enter <mode>``; ``inspect`` shows how a pushed mode brings its own prompt
and command set. ``quit`` leaves the current mode and exits from the last.
"""

import argparse
import functools
import sys
from typing import Optional, TextIO

from ..backends.stream import StreamBackend
from ..commands.completion import longest_common_prefix
from ..commands.types import CommandResult
from ..config.loader import load_config
from ..config.models import ShellConfig
from ..preprocessing.variables import VariablesEngine
from ..shell.dispatcher import Dispatcher
from ..shell.mode import BackendFactory
from ..utils.error_handling import CommandError, ConfigurationError, handle_command_execution
from ..utils.logging import get_logger, log_shutdown, log_startup, setup_logging


logger = get_logger(__name__)


def build_demo_shell(config: ShellConfig,
                     backend_factory: Optional[BackendFactory] = None,
                     use_variables: bool = True,
                     output: Optional[TextIO] = None) -> Dispatcher:
    """Create a dispatcher with the demo modes, with ``main`` active."""
    out = output or sys.stdout
    dispatcher = Dispatcher(config, backend_factory)
    variables = VariablesEngine({"SHELL": config.app.name})

    def say(text: str = "") -> None:
        print(text, file=out)

    def show_help(args: str) -> CommandResult:
        say(dispatcher.current_mode().help(indent=2).rstrip("\n"))
        return CommandResult.EXECUTED

    def quit_mode(args: str) -> CommandResult:
        dispatcher.mode_pop()
        if not dispatcher.has_mode():
            return dispatcher.stop()
        return CommandResult.EXECUTED

    def enter_mode(args: str) -> CommandResult:
        name = args.strip()
        if name == "main" or not dispatcher.mode_push(name):
            raise CommandError(f"enter: no such mode: {name or '<empty>'}")
        return CommandResult.EXECUTED

    @handle_command_execution("var set")
    def set_variable(args: str) -> CommandResult:
        name, sep, value = args.partition(" ")
        if not name or not sep:
            raise ValueError("usage: var set <name> <value>")
        variables.set(name, value)
        return CommandResult.EXECUTED

    def unset_variable(args: str) -> CommandResult:
        if not args:
            raise CommandError("var unset: missing variable name")
        variables.unset(args)
        return CommandResult.EXECUTED

    def list_variables(args: str) -> CommandResult:
        for name, value in sorted(variables.variables.items()):
            say(f"{name}={value}")
        return CommandResult.EXECUTED

    def show_modes(args: str) -> CommandResult:
        active = [mode.name for mode in dispatcher.stack]
        for name in sorted(dispatcher.modes):
            marker = "*" if active and active[-1] == name else " "
            say(f"{marker} {name}")
        return CommandResult.EXECUTED

    def show_history(args: str) -> CommandResult:
        for index, entry in enumerate(dispatcher.current_mode().backend.history, 1):
            say(f"{index:5d}  {entry}")
        return CommandResult.EXECUTED

    main = dispatcher.mode_add("main")
    main.add_all([
        ("echo", "print the arguments", lambda args: say(args)),
        ("help", "list the commands of the current mode", show_help),
        ("enter", "push another mode onto the mode stack", enter_mode),
        ("quit", "leave the current mode, exit from the last one", quit_mode),
    ])
    var = main.add("var", "manage shell variables (assign with name=value)")
    var.add("list", "print all variables", list_variables)
    var.add("set", "set a variable: var set <name> <value>", set_variable)
    var.add("unset", "remove a variable: var unset <name>", unset_variable)

    inspect = dispatcher.mode_add("inspect", "inspect> ")
    inspect.add_all([
        ("modes", "list modes, the active one is marked", show_modes),
        ("history", "print the history of this mode", show_history),
        ("help", "list the commands of the current mode", show_help),
        ("quit", "return to the previous mode", quit_mode),
    ])

    if config.completion.enabled:
        main.on_complete(longest_common_prefix)
        inspect.on_complete(longest_common_prefix)

    if use_variables:
        dispatcher.add_preprocessor(variables)

    dispatcher.mode_push("main")
    return dispatcher


def handle_cli_command(args: argparse.Namespace) -> int:
    """Load configuration, build the demo shell and run it until exit."""
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.history_dir:
        config.history.directory = args.history_dir

    setup_logging(config, verbose=args.verbose)
    log_startup(args.config)

    backend_factory = functools.partial(StreamBackend, stream=sys.stdin) if args.stdin else None
    dispatcher = build_demo_shell(config, backend_factory, use_variables=not args.no_variables)

    def report(line: str, error: str) -> None:
        print(f"error: {error}", file=sys.stderr)

    dispatcher.run(on_error=report)
    log_shutdown()
    return 0
