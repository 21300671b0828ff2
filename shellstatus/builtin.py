"""The status builtin: flag scanning, subcommand resolution and dispatch."""

from shellstatus.aliases import ALIASES, names_for, resolve
from shellstatus.dispatcher import Dispatcher
from shellstatus.errors import STATUS_CMD_OK, StatusError, UnrecognizedSubcommandWordError
from shellstatus.guard import claim
from shellstatus.logging import get_logger
from shellstatus.models import Action, StatusResult
from shellstatus.scanner import scan_options
from shellstatus.session import IoStreams, StatusEnvironment

logger = get_logger(__name__)

HELP_FLAGS = """\
  -h, --help                 print this help and exit
  -L, --level N              use stack level N for current-function (default 1)
  -j, --job-control MODE     same as the job-control subcommand
  -f, -n, -b, -c, -i, -l, -t and the long forms of the subcommands above are
  deprecated spellings of the matching subcommand
"""


def format_help(cmd: str) -> str:
    """Return the usage text printed by -h/--help.

    Each subcommand is listed once, with its aliases, in the order its first
    name appears in the alias table.
    """
    lines = [
        f'Usage: {cmd} [OPTIONS] [SUBCOMMAND] [ARGUMENTS]',
        '',
        'Query the state of the interpreter or change its job-control mode.',
        '',
        'Subcommands:',
    ]
    listed: set[Action] = set()
    for entry in ALIASES:
        if entry.action in listed:
            continue
        listed.add(entry.action)
        lines.append('  ' + ', '.join(names_for(entry.action)))
    lines += ['', 'Options:']
    return '\n'.join(lines) + '\n' + HELP_FLAGS


def builtin_status(argv: list[str], env: StatusEnvironment, streams: IoStreams) -> int:
    """Run the status command.

    Args:
        argv: The command name followed by its arguments.
        env: The interpreter state to report on.
        streams: Where output and error messages are written.

    Returns:
        The exit status.
    """
    cmd, args = argv[0], argv[1:]
    logger.debug('status_invoked', cmd=cmd, _verbose_args=args)

    try:
        options, consumed = scan_options(args)
        if options.print_help:
            streams.out.write(format_help(cmd))
            return STATUS_CMD_OK

        # The first word after the flags names the subcommand.
        remaining = args[consumed:]
        if remaining:
            action = resolve(remaining[0])
            if action is Action.UNDEFINED:
                raise UnrecognizedSubcommandWordError(remaining[0], consumed)
            options.action = claim(options.action, action)
            remaining = remaining[1:]

        return Dispatcher(cmd, env, streams).dispatch(options, remaining)
    except StatusError as exc:
        logger.debug(
            'status_failed',
            error=type(exc).__name__,
            exit_code=exc.exit_code,
            _debug_message=exc.render(cmd),
        )
        streams.err.write(exc.render(cmd) + '\n')
        return exc.exit_code


def run_status(argv: list[str], env: StatusEnvironment) -> StatusResult:
    """Run the status command and capture what it wrote."""
    streams = IoStreams()
    exit_code = builtin_status(argv, env, streams)
    return StatusResult(
        exit_code=exit_code,
        stdout=streams.out.getvalue(),
        stderr=streams.err.getvalue(),
    )
