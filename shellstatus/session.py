"""Interfaces to the interpreter state the status command reads.

The interpreter provides a ParserFacilities and a SessionState. ScriptContext
and SessionFlags are static stand-ins used by the console entry point and the
tests.
"""

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import BaseModel, Field

from shellstatus.features import FeatureRegistry
from shellstatus.models import LibData, StatusVars
from shellstatus.paths import get_executable_path


class ParserFacilities(Protocol):
    """Call-stack and source-location queries answered by the interpreter."""

    @property
    def libdata(self) -> LibData: ...

    def current_filename(self) -> str | None: ...

    def get_function_name(self, level: int) -> str | None: ...

    def get_lineno(self) -> int: ...

    def is_block(self) -> bool: ...

    def is_breakpoint(self) -> bool: ...

    def stack_trace(self) -> str: ...


class SessionState(Protocol):
    """Session-wide facts owned by the interpreter."""

    def get_login(self) -> bool: ...

    def is_interactive_session(self) -> bool: ...


class ScriptContext(BaseModel):
    """A fixed snapshot of the interpreter's execution context.

    ``functions`` lists the active function calls innermost first, so level 1
    is the function currently running and level 2 its caller.
    """

    filename: str | None = None
    functions: list[str] = Field(default_factory=list)
    line_number: int = Field(default=0, ge=0)
    in_block: bool = False
    at_breakpoint: bool = False
    is_subshell: bool = False
    command: str = ''
    commandline: str = ''
    trace: str = ''

    @property
    def libdata(self) -> LibData:
        return LibData(
            is_subshell=self.is_subshell,
            status_vars=StatusVars(command=self.command, commandline=self.commandline),
        )

    def current_filename(self) -> str | None:
        return self.filename

    def get_function_name(self, level: int) -> str | None:
        # Level 0 names the function that hit the breakpoint.
        if level == 0:
            return self.functions[0] if self.at_breakpoint and self.functions else None
        if level <= len(self.functions):
            return self.functions[level - 1]
        return None

    def get_lineno(self) -> int:
        return self.line_number

    def is_block(self) -> bool:
        return self.in_block

    def is_breakpoint(self) -> bool:
        return self.at_breakpoint

    def stack_trace(self) -> str:
        return self.trace


class SessionFlags(BaseModel):
    """Fixed login and interactivity answers."""

    login: bool = False
    interactive: bool = False

    def get_login(self) -> bool:
        return self.login

    def is_interactive_session(self) -> bool:
        return self.interactive


@dataclass
class IoStreams:
    """Output and error buffers for one command invocation."""

    out: io.StringIO = field(default_factory=io.StringIO)
    err: io.StringIO = field(default_factory=io.StringIO)


@dataclass
class StatusEnvironment:
    """Everything outside the status command that it consults."""

    parser: ParserFacilities
    session: SessionState
    features: FeatureRegistry = field(default_factory=FeatureRegistry)
    executable_path: Callable[[str], str] = get_executable_path
    program_name: str = 'fish'
