"""Subcommand names accepted by the status command."""

from bisect import bisect_left
from collections.abc import Sequence

from shellstatus.models import Action, AliasEntry

# Must be sorted by name; resolve() bisects on it.
ALIASES: tuple[AliasEntry, ...] = (
    AliasEntry(action=Action.BASENAME, name='basename'),
    AliasEntry(action=Action.BASENAME, name='current-basename'),
    AliasEntry(action=Action.CURRENT_COMMAND, name='current-command'),
    AliasEntry(action=Action.CURRENT_COMMANDLINE, name='current-commandline'),
    AliasEntry(action=Action.DIRNAME, name='current-dirname'),
    AliasEntry(action=Action.FILENAME, name='current-filename'),
    AliasEntry(action=Action.FUNCTION, name='current-function'),
    AliasEntry(action=Action.LINE_NUMBER, name='current-line-number'),
    AliasEntry(action=Action.DIRNAME, name='dirname'),
    AliasEntry(action=Action.FEATURES, name='features'),
    AliasEntry(action=Action.FILENAME, name='filename'),
    AliasEntry(action=Action.FISH_PATH, name='fish-path'),
    AliasEntry(action=Action.FUNCTION, name='function'),
    AliasEntry(action=Action.IS_BLOCK, name='is-block'),
    AliasEntry(action=Action.IS_BREAKPOINT, name='is-breakpoint'),
    AliasEntry(action=Action.IS_COMMAND_SUBSTITUTION, name='is-command-substitution'),
    AliasEntry(action=Action.IS_FULL_JOB_CONTROL, name='is-full-job-control'),
    AliasEntry(action=Action.IS_INTERACTIVE, name='is-interactive'),
    AliasEntry(action=Action.IS_INTERACTIVE_JOB_CONTROL, name='is-interactive-job-control'),
    AliasEntry(action=Action.IS_LOGIN, name='is-login'),
    AliasEntry(action=Action.IS_NO_JOB_CONTROL, name='is-no-job-control'),
    AliasEntry(action=Action.SET_JOB_CONTROL, name='job-control'),
    AliasEntry(action=Action.LINE_NUMBER, name='line-number'),
    AliasEntry(action=Action.STACK_TRACE, name='print-stack-trace'),
    AliasEntry(action=Action.STACK_TRACE, name='stack-trace'),
    AliasEntry(action=Action.TEST_FEATURE, name='test-feature'),
)

UNDEFINED_DISPLAY_NAME = 'default'


class AliasTableError(ValueError):
    """Raised when an alias table breaks its ordering rules."""


def verify_alias_table(entries: Sequence[AliasEntry]) -> None:
    """Check that names are strictly increasing and never select UNDEFINED.

    Args:
        entries: The alias table to check.

    Raises:
        AliasTableError: If the table is unsorted, repeats a name or maps a
            name to the UNDEFINED action.
    """
    previous: AliasEntry | None = None
    for entry in entries:
        if entry.action is Action.UNDEFINED:
            msg = f'alias {entry.name!r} cannot select the undefined action'
            raise AliasTableError(msg)
        if previous is not None and entry.name <= previous.name:
            msg = f'alias {entry.name!r} must sort after {previous.name!r}'
            raise AliasTableError(msg)
        previous = entry


verify_alias_table(ALIASES)

_NAMES = tuple(entry.name for entry in ALIASES)


def resolve(name: str) -> Action:
    """Return the action selected by a subcommand word, or UNDEFINED."""
    index = bisect_left(_NAMES, name)
    if index < len(_NAMES) and _NAMES[index] == name:
        return ALIASES[index].action
    return Action.UNDEFINED


def display_name(action: Action) -> str:
    """Return the name used for an action in messages.

    This is the first name for the action in table order, so DIRNAME displays
    as ``current-dirname``. UNDEFINED displays as ``default``.
    """
    for entry in ALIASES:
        if entry.action is action:
            return entry.name
    return UNDEFINED_DISPLAY_NAME


def names_for(action: Action) -> list[str]:
    """Return every subcommand word that selects an action."""
    return [entry.name for entry in ALIASES if entry.action is action]
