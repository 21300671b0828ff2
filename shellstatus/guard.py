"""The single point where the status command's action is chosen."""

from shellstatus.aliases import display_name
from shellstatus.errors import ExclusiveSubcommandConflictError
from shellstatus.logging import get_logger
from shellstatus.models import Action

logger = get_logger(__name__)


def claim(current: Action, requested: Action) -> Action:
    """Select an action, refusing a second one.

    Flags and subcommand words both call this, so a conflict reads the same
    whichever way each action was requested.

    Args:
        current: The action chosen so far, UNDEFINED if none.
        requested: The action being requested.

    Returns:
        The requested action.

    Raises:
        ExclusiveSubcommandConflictError: If an action was already chosen.
    """
    if current is not Action.UNDEFINED:
        raise ExclusiveSubcommandConflictError(current, requested)
    logger.debug('action_claimed', action=display_name(requested))
    return requested
