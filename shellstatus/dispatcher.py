"""Execution of the action selected for a status invocation."""

import errno
import os
from collections.abc import Callable

from shellstatus.errors import STATUS_CMD_OK, UnexpectedArgumentCountError
from shellstatus.job_control import (
    describe_job_control_mode,
    get_job_control_mode,
    parse_job_control_mode,
    set_job_control_mode,
)
from shellstatus.logging import get_logger
from shellstatus.models import Action, JobControlMode, StatusOptions
from shellstatus.paths import canonical_executable_path, posix_basename, posix_dirname
from shellstatus.session import IoStreams, StatusEnvironment

logger = get_logger(__name__)

STANDARD_INPUT = 'Standard input'
NOT_A_FUNCTION = 'Not a function'

# Exit statuses of test-feature
TEST_FEATURE_ON = 0
TEST_FEATURE_OFF = 1
TEST_FEATURE_NOT_RECOGNIZED = 2


def check_argument_count(action: Action, args: list[str], expected: int) -> None:
    """Raise UnexpectedArgumentCountError unless args has expected items."""
    if len(args) != expected:
        raise UnexpectedArgumentCountError(action, expected, len(args))


def expected_argument_count(options: StatusOptions) -> int:
    """Return how many arguments the selected action takes."""
    if options.action is Action.TEST_FEATURE:
        return 1
    if options.action is Action.SET_JOB_CONTROL and options.requested_job_control_mode is None:
        return 1
    return 0


class Dispatcher:
    """Runs one status action against an environment, writing to streams."""

    def __init__(self, cmd: str, env: StatusEnvironment, streams: IoStreams) -> None:
        self.cmd = cmd
        self.env = env
        self.streams = streams
        self._handlers: dict[Action, Callable[[StatusOptions, list[str]], int]] = {
            Action.UNDEFINED: self._print_summary,
            Action.SET_JOB_CONTROL: self._set_job_control,
            Action.FEATURES: self._print_features,
            Action.TEST_FEATURE: self._test_feature,
            Action.BASENAME: self._print_filename,
            Action.DIRNAME: self._print_filename,
            Action.FILENAME: self._print_filename,
            Action.FUNCTION: self._print_function,
            Action.LINE_NUMBER: self._print_line_number,
            Action.STACK_TRACE: self._print_stack_trace,
            Action.CURRENT_COMMAND: self._print_current_command,
            Action.CURRENT_COMMANDLINE: self._print_current_commandline,
            Action.FISH_PATH: self._print_executable_path,
        }
        parser = env.parser
        self._probes: dict[Action, Callable[[], bool]] = {
            Action.IS_INTERACTIVE: env.session.is_interactive_session,
            Action.IS_LOGIN: env.session.get_login,
            Action.IS_COMMAND_SUBSTITUTION: lambda: parser.libdata.is_subshell,
            Action.IS_BLOCK: parser.is_block,
            Action.IS_BREAKPOINT: parser.is_breakpoint,
            Action.IS_FULL_JOB_CONTROL: lambda: get_job_control_mode() is JobControlMode.ALL,
            Action.IS_INTERACTIVE_JOB_CONTROL: lambda: get_job_control_mode() is JobControlMode.INTERACTIVE,
            Action.IS_NO_JOB_CONTROL: lambda: get_job_control_mode() is JobControlMode.NONE,
        }

    def dispatch(self, options: StatusOptions, args: list[str]) -> int:
        """Validate the argument count, then run the selected action.

        Returns:
            The exit status of the action.

        Raises:
            StatusError: If the arguments do not fit the action.
        """
        check_argument_count(options.action, args, expected_argument_count(options))

        probe = self._probes.get(options.action)
        if probe is not None:
            return 0 if probe() else 1
        return self._handlers[options.action](options, args)

    def _write_line(self, text: str) -> None:
        self.streams.out.write(f'{text}\n')

    def _print_summary(self, _options: StatusOptions, _args: list[str]) -> int:
        if self.env.session.get_login():
            self._write_line('This is a login shell')
        else:
            self._write_line('This is not a login shell')
        mode = get_job_control_mode()
        self._write_line(f'Job control: {describe_job_control_mode(mode)}')
        self.streams.out.write(self.env.parser.stack_trace())
        return STATUS_CMD_OK

    def _set_job_control(self, options: StatusOptions, args: list[str]) -> int:
        mode = options.requested_job_control_mode
        if mode is None:
            mode = parse_job_control_mode(args[0])
        set_job_control_mode(mode)
        return STATUS_CMD_OK

    def _print_features(self, _options: StatusOptions, _args: list[str]) -> int:
        features = self.env.features.feature_metadata()
        width = max((len(feature.name) for feature in features), default=0) + 1
        for feature in features:
            state = 'on' if feature.enabled else 'off'
            self._write_line(f'{feature.name:<{width}}{state:<3} {feature.groups} {feature.description}')
        return STATUS_CMD_OK

    def _test_feature(self, _options: StatusOptions, args: list[str]) -> int:
        name = args[0]
        for feature in self.env.features.feature_metadata():
            if feature.name == name:
                return TEST_FEATURE_ON if self.env.features.feature_test(name) else TEST_FEATURE_OFF
        return TEST_FEATURE_NOT_RECOGNIZED

    def _print_filename(self, options: StatusOptions, _args: list[str]) -> int:
        filename = self.env.parser.current_filename() or ''
        if not filename:
            filename = STANDARD_INPUT
        elif options.action is Action.DIRNAME:
            filename = posix_dirname(filename)
        elif options.action is Action.BASENAME:
            filename = posix_basename(filename)
        self._write_line(filename)
        return STATUS_CMD_OK

    def _print_function(self, options: StatusOptions, _args: list[str]) -> int:
        function_name = self.env.parser.get_function_name(options.level)
        self._write_line(function_name if function_name is not None else NOT_A_FUNCTION)
        return STATUS_CMD_OK

    def _print_line_number(self, _options: StatusOptions, _args: list[str]) -> int:
        # TODO: honor --level once the interpreter can report the line number of outer frames.
        self._write_line(str(self.env.parser.get_lineno()))
        return STATUS_CMD_OK

    def _print_stack_trace(self, _options: StatusOptions, _args: list[str]) -> int:
        self.streams.out.write(self.env.parser.stack_trace())
        return STATUS_CMD_OK

    def _print_current_command(self, _options: StatusOptions, _args: list[str]) -> int:
        command = self.env.parser.libdata.status_vars.command
        self._write_line(command or self.env.program_name)
        return STATUS_CMD_OK

    def _print_current_commandline(self, _options: StatusOptions, _args: list[str]) -> int:
        self._write_line(self.env.parser.libdata.status_vars.commandline)
        return STATUS_CMD_OK

    def _print_executable_path(self, _options: StatusOptions, _args: list[str]) -> int:
        try:
            path = self.env.executable_path(self.env.program_name)
        except OSError as exc:
            path = ''
            reason = exc.strerror or str(exc)
        else:
            reason = os.strerror(errno.ENOENT)

        # Not fatal: the error is reported and the command still succeeds.
        if not path:
            logger.debug('executable_path_unavailable', program=self.env.program_name, reason=reason)
            self.streams.err.write(f"{self.cmd}: Could not get executable path: '{reason}'\n")
            return STATUS_CMD_OK

        self._write_line(canonical_executable_path(path))
        return STATUS_CMD_OK
