"""Console entry point running the status builtin against a configured session."""

import sys
from pathlib import Path

from shellstatus.builtin import run_status
from shellstatus.config import StatusConfigError, build_environment, load_config, resolve_config_path
from shellstatus.job_control import set_job_control_mode
from shellstatus.logging import configure_logging, get_logger

logger = get_logger(__name__)

COMMAND_NAME = 'status'


def main(argv: list[str] | None = None, *, config_path: Path | None = None) -> int:
    """Main entry point for the shellstatus CLI."""
    args = sys.argv[1:] if argv is None else argv

    configure_logging(verbose=False)
    try:
        config = load_config(resolve_config_path(config_path))
        if config.verbose:
            configure_logging(verbose=True)
        env = build_environment(config)
    except StatusConfigError as e:
        logger.debug('configuration_failed', error=str(e))
        sys.stderr.write(f'Error: {e}\n')
        return 1

    set_job_control_mode(config.job_control)
    result = run_status([COMMAND_NAME, *args], env)

    sys.stdout.write(result.stdout)
    sys.stderr.write(result.stderr)
    return result.exit_code


if __name__ == '__main__':
    sys.exit(main())
