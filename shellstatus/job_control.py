"""Job-control mode names and the process-wide job-control setting."""

from shellstatus.errors import InvalidJobControlModeError
from shellstatus.logging import get_logger
from shellstatus.models import JobControlMode

logger = get_logger(__name__)

_MODES_BY_TOKEN = {
    'full': JobControlMode.ALL,
    'interactive': JobControlMode.INTERACTIVE,
    'none': JobControlMode.NONE,
}
_TOKENS_BY_MODE = {mode: token for token, mode in _MODES_BY_TOKEN.items()}

_DESCRIPTIONS = {
    JobControlMode.ALL: 'Always',
    JobControlMode.INTERACTIVE: 'Only on interactive jobs',
    JobControlMode.NONE: 'Never',
}

# Shared with the rest of the interpreter. One writer at a time.
_job_control_mode = JobControlMode.INTERACTIVE


def parse_job_control_mode(token: str) -> JobControlMode:
    """Parse a job-control mode name.

    Args:
        token: One of ``full``, ``interactive`` or ``none`` (case-sensitive).

    Returns:
        The matching mode.

    Raises:
        InvalidJobControlModeError: For any other token.
    """
    try:
        return _MODES_BY_TOKEN[token]
    except KeyError:
        raise InvalidJobControlModeError(token) from None


def format_job_control_mode(mode: JobControlMode) -> str:
    """Return the name parse_job_control_mode accepts for a mode."""
    return _TOKENS_BY_MODE[mode]


def describe_job_control_mode(mode: JobControlMode) -> str:
    """Return the wording used in the session summary."""
    return _DESCRIPTIONS[mode]


def get_job_control_mode() -> JobControlMode:
    return _job_control_mode


def set_job_control_mode(mode: JobControlMode) -> None:
    global _job_control_mode  # noqa: PLW0603 - process-wide setting
    logger.debug(
        'job_control_mode_changed',
        previous=format_job_control_mode(_job_control_mode),
        mode=format_job_control_mode(mode),
    )
    _job_control_mode = mode
