"""Pytest configuration and fixtures for shellstatus tests."""

import logging
from collections.abc import Iterator

import pytest

from shellstatus.features import FeatureRegistry
from shellstatus.job_control import get_job_control_mode, set_job_control_mode
from shellstatus.logging import configure_logging
from shellstatus.models import JobControlMode
from shellstatus.session import ScriptContext, SessionFlags, StatusEnvironment

STACK_TRACE = "in function 'inner'\n\tcalled on line 4 of file /home/user/tool.fish\n"


@pytest.fixture(scope='session', autouse=True)
def quiet_logging() -> None:
    """Route structlog through the CLI renderer at INFO so debug events stay silent."""
    configure_logging(verbose=False)


@pytest.fixture(autouse=True)
def reset_job_control_mode() -> Iterator[None]:
    """Start every test from the interpreter's default job-control mode."""
    previous = get_job_control_mode()
    set_job_control_mode(JobControlMode.INTERACTIVE)
    yield
    set_job_control_mode(previous)
    logging.getLogger().setLevel(logging.INFO)


@pytest.fixture
def context() -> ScriptContext:
    return ScriptContext(
        filename='/home/user/tool.fish',
        functions=['inner', 'outer', 'main'],
        line_number=12,
        command='tool',
        commandline='tool --flag value',
        trace=STACK_TRACE,
    )


@pytest.fixture
def session() -> SessionFlags:
    return SessionFlags(login=True, interactive=False)


@pytest.fixture
def env(context: ScriptContext, session: SessionFlags) -> StatusEnvironment:
    return StatusEnvironment(
        parser=context,
        session=session,
        features=FeatureRegistry(overrides={'qmark-noglob': False, 'stderr-nocaret': True}),
        executable_path=lambda _name: 'bin/fish',
    )


@pytest.fixture
def stack_trace() -> str:
    return STACK_TRACE
