"""Flag scanning for the status command.

The scanner follows getopt conventions: short flags may be clustered (``-il``),
value flags take the rest of their token or the next argument (``-L2``,
``-L 2``, ``--level=2``, ``--level 2``), long names may be abbreviated to any
unambiguous prefix, and scanning stops at ``--`` or the first argument that is
not a flag.

Flags that duplicate subcommand words (``--is-login`` and friends) are kept so
existing scripts keep working. Do not add new ones: new behavior gets a
subcommand word only.
"""

import re
from dataclasses import dataclass
from typing import Literal

from shellstatus.aliases import display_name
from shellstatus.errors import (
    InvalidLevelValueError,
    MissingOptionArgumentError,
    UnknownOptionError,
)
from shellstatus.guard import claim
from shellstatus.job_control import parse_job_control_mode
from shellstatus.logging import get_logger
from shellstatus.models import Action, StatusOptions

logger = get_logger(__name__)

ValueKind = Literal['none', 'mode', 'level']

# Largest level accepted, matching a 32-bit signed int.
MAX_LEVEL = 2**31 - 1

_INTEGER = re.compile(r'[+-]?[0-9]+')


@dataclass(frozen=True)
class FlagSpec:
    """One flag the scanner recognizes."""

    short: str | None
    long_names: tuple[str, ...]
    action: Action | None = None
    value: ValueKind = 'none'
    deprecated: bool = False
    help: bool = False

    @property
    def takes_value(self) -> bool:
        return self.value != 'none'


STATUS_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec('h', ('help',), help=True),
    FlagSpec('f', ('current-filename', 'filename'), action=Action.FILENAME, deprecated=True),
    FlagSpec(
        'n',
        ('current-line-number', 'line', 'line-number'),
        action=Action.LINE_NUMBER,
        deprecated=True,
    ),
    FlagSpec(None, ('fish-path',), action=Action.FISH_PATH, deprecated=True),
    FlagSpec('b', ('is-block',), action=Action.IS_BLOCK, deprecated=True),
    FlagSpec('c', ('is-command-substitution',), action=Action.IS_COMMAND_SUBSTITUTION, deprecated=True),
    FlagSpec(None, ('is-full-job-control',), action=Action.IS_FULL_JOB_CONTROL, deprecated=True),
    FlagSpec('i', ('is-interactive',), action=Action.IS_INTERACTIVE, deprecated=True),
    FlagSpec(
        None,
        ('is-interactive-job-control',),
        action=Action.IS_INTERACTIVE_JOB_CONTROL,
        deprecated=True,
    ),
    FlagSpec('l', ('is-login',), action=Action.IS_LOGIN, deprecated=True),
    FlagSpec(None, ('is-no-job-control',), action=Action.IS_NO_JOB_CONTROL, deprecated=True),
    FlagSpec('j', ('job-control',), action=Action.SET_JOB_CONTROL, value='mode'),
    FlagSpec('L', ('level',), value='level'),
    FlagSpec('t', ('print-stack-trace', 'stack-trace'), action=Action.STACK_TRACE, deprecated=True),
)


def parse_level(value: str, position: int) -> int:
    """Parse the value of -L/--level.

    Surrounding whitespace is ignored. Non-integers and out-of-range integers
    fail with different messages.

    Raises:
        InvalidLevelValueError: If the value is not a non-negative integer.
    """
    text = value.strip()
    if not _INTEGER.fullmatch(text):
        raise InvalidLevelValueError(value, position, reason='not-a-number')
    level = int(text)
    if level < 0 or level > MAX_LEVEL:
        raise InvalidLevelValueError(value, position, reason='out-of-range')
    return level


class OptionScanner:
    """Scans leading flags into a StatusOptions record."""

    def __init__(self, flags: tuple[FlagSpec, ...] = STATUS_FLAGS) -> None:
        self.flags = flags
        self._short = {flag.short: flag for flag in flags if flag.short}
        self._long = {name: flag for flag in flags for name in flag.long_names}

    def scan(self, args: list[str]) -> tuple[StatusOptions, int]:
        """Scan flags from the front of args.

        Args:
            args: The arguments after the command name.

        Returns:
            The populated options and how many arguments were consumed.

        Raises:
            ScanError: For unknown flags, missing values and bad levels.
            StatusError: For action conflicts and bad job-control modes.
        """
        options = StatusOptions()
        index = 0
        while index < len(args):
            token = args[index]
            if token == '--':
                index += 1
                break
            if not token.startswith('-') or token == '-':
                break
            if token.startswith('--'):
                index = self._scan_long(args, index, options)
            else:
                index = self._scan_short(args, index, options)
        return options, index

    def match_long(self, name: str) -> FlagSpec | None:
        """Find the flag for a long name or an unambiguous prefix of one.

        A prefix shared by names of the same flag (``--li`` for ``--line`` and
        ``--line-number``) is not ambiguous.
        """
        if name in self._long:
            return self._long[name]
        candidates = {flag for long_name, flag in self._long.items() if long_name.startswith(name)}
        if len(candidates) == 1:
            return candidates.pop()
        return None

    def _scan_long(self, args: list[str], index: int, options: StatusOptions) -> int:
        token = args[index]
        name, has_inline, inline = token[2:].partition('=')
        flag = self.match_long(name) if name else None
        if flag is None:
            raise UnknownOptionError(token, index)

        value = None
        if flag.takes_value:
            if has_inline:
                value = inline
            elif index + 1 < len(args):
                index += 1
                value = args[index]
            else:
                raise MissingOptionArgumentError(token, index)
        elif has_inline:
            raise UnknownOptionError(token, index)

        self._apply(flag, value, token, index, options)
        return index + 1

    def _scan_short(self, args: list[str], index: int, options: StatusOptions) -> int:
        token = args[index]
        position = 1
        while position < len(token):
            char = token[position]
            flag = self._short.get(char)
            if flag is None:
                raise UnknownOptionError(f'-{char}', index)
            if not flag.takes_value:
                self._apply(flag, None, f'-{char}', index, options)
                position += 1
                continue

            rest = token[position + 1:]
            if rest:
                value = rest
            elif index + 1 < len(args):
                index += 1
                value = args[index]
            else:
                raise MissingOptionArgumentError(f'-{char}', index)
            self._apply(flag, value, f'-{char}', index, options)
            break
        return index + 1

    def _apply(
        self,
        flag: FlagSpec,
        value: str | None,
        token: str,
        position: int,
        options: StatusOptions,
    ) -> None:
        if flag.help:
            options.print_help = True
            return
        if flag.value == 'level':
            options.level = parse_level(value, position)
            return

        options.action = claim(options.action, flag.action)
        if flag.deprecated:
            logger.debug(
                'deprecated_flag_used',
                flag=token,
                subcommand=display_name(flag.action),
            )
        if flag.value == 'mode':
            options.requested_job_control_mode = parse_job_control_mode(value)


_default_scanner = OptionScanner()


def scan_options(args: list[str]) -> tuple[StatusOptions, int]:
    """Scan the status command's flags with the standard flag table."""
    return _default_scanner.scan(args)
