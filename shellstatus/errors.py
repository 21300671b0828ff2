"""Error types and exit statuses for the status command.

Every failure the command can report derives from StatusError. An error knows
its exit status and renders its own message given the invoking command name,
for example::

    status: is-login is-interactive: options cannot be used together
"""

from typing import Literal

from shellstatus.aliases import display_name
from shellstatus.models import Action

# Exit statuses
STATUS_CMD_OK = 0
STATUS_CMD_ERROR = 1
STATUS_INVALID_ARGS = 121

LevelErrorReason = Literal['not-a-number', 'out-of-range']


class StatusError(Exception):
    """Base exception for status command failures."""

    exit_code = STATUS_CMD_ERROR

    def render(self, cmd: str) -> str:
        """Return the message as written to the error stream, without newline."""
        return f'{cmd}: {self.detail()}'

    def detail(self) -> str:
        return str(self)


class ScanError(StatusError):
    """A flag could not be scanned."""

    exit_code = STATUS_INVALID_ARGS

    def __init__(self, token: str, position: int) -> None:
        self.token = token
        self.position = position
        super().__init__(f'{token} (argument {position})')


class UnknownOptionError(ScanError):
    def detail(self) -> str:
        return f'{self.token}: unknown option'


class MissingOptionArgumentError(ScanError):
    def detail(self) -> str:
        return f'{self.token}: option requires an argument'


class InvalidLevelValueError(ScanError):
    """The value given to -L/--level is not a usable stack depth."""

    def __init__(self, token: str, position: int, *, reason: LevelErrorReason) -> None:
        super().__init__(token, position)
        self.reason = reason

    def detail(self) -> str:
        if self.reason == 'not-a-number':
            return f'{self.token}: invalid integer'
        return f"Invalid level value '{self.token}'"


class InvalidJobControlModeError(StatusError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(token)

    def detail(self) -> str:
        return f"Invalid job control mode '{self.token}'"


class ExclusiveSubcommandConflictError(StatusError):
    """A second action was requested after one had already been chosen."""

    def __init__(self, current: Action, requested: Action) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f'{current.name} {requested.name}')

    def detail(self) -> str:
        return f'{display_name(self.current)} {display_name(self.requested)}: options cannot be used together'


class UnrecognizedSubcommandWordError(StatusError):
    exit_code = STATUS_INVALID_ARGS

    def __init__(self, word: str, position: int) -> None:
        self.word = word
        self.position = position
        super().__init__(word)

    def detail(self) -> str:
        return f'{self.word}: invalid subcommand'


class UnexpectedArgumentCountError(StatusError):
    exit_code = STATUS_INVALID_ARGS

    def __init__(self, action: Action, expected: int, actual: int) -> None:
        self.action = action
        self.expected = expected
        self.actual = actual
        super().__init__(f'{action.name}: {expected} != {actual}')

    def detail(self) -> str:
        return f'{display_name(self.action)}: expected {self.expected} arguments; got {self.actual}'
