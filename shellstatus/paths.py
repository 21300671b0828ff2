"""Path utilities for the filename and executable-path subcommands."""

import errno
import os
import shutil
import sys

from shellstatus.logging import get_logger

logger = get_logger(__name__)


def get_executable_path(name: str) -> str:
    """Return the path the running program was started from.

    Uses the program's own argv[0] when available, otherwise searches PATH
    for ``name``.

    Raises:
        FileNotFoundError: If no path can be determined.
    """
    argv0 = sys.argv[0] if sys.argv else ''
    if argv0 and argv0 != '-c':
        return argv0
    found = shutil.which(name)
    if found:
        return found
    raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), name)


def canonical_executable_path(path: str) -> str:
    """Canonicalize an absolute executable path when possible.

    Relative paths depend on the parent process's working directory and PATH
    at launch, so they are returned unchanged. An absolute path that cannot be
    resolved, or whose resolved target is missing, is also returned unchanged.
    """
    if not os.path.isabs(path):
        return path
    try:
        real = os.path.realpath(path, strict=True)
    except OSError as exc:
        logger.debug('realpath_failed', path=path, error=str(exc))
        return path
    if not os.access(real, os.F_OK):
        logger.debug('realpath_not_accessible', path=path, real=real)
        return path
    return real


def posix_basename(path: str) -> str:
    """Return the last component of path, as POSIX basename(3) does."""
    if not path:
        return '.'
    stripped = path.rstrip('/')
    if not stripped:
        return '/'
    return stripped.rsplit('/', 1)[-1]


def posix_dirname(path: str) -> str:
    """Return path without its last component, as POSIX dirname(3) does."""
    stripped = path.rstrip('/')
    if not stripped:
        return '/' if path else '.'
    if '/' not in stripped:
        return '.'
    parent = stripped.rsplit('/', 1)[0].rstrip('/')
    return parent or '/'
