"""Pydantic models and enumerations for shellstatus."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Action(Enum):
    """The mutually exclusive behaviors the status command can execute."""

    CURRENT_COMMAND = 1
    BASENAME = 2
    DIRNAME = 3
    FEATURES = 4
    FILENAME = 5
    FISH_PATH = 6
    FUNCTION = 7
    IS_BLOCK = 8
    IS_BREAKPOINT = 9
    IS_COMMAND_SUBSTITUTION = 10
    IS_FULL_JOB_CONTROL = 11
    IS_INTERACTIVE = 12
    IS_INTERACTIVE_JOB_CONTROL = 13
    IS_LOGIN = 14
    IS_NO_JOB_CONTROL = 15
    LINE_NUMBER = 16
    SET_JOB_CONTROL = 17
    STACK_TRACE = 18
    TEST_FEATURE = 19
    CURRENT_COMMANDLINE = 20
    # Nothing selected yet; also selects the session summary.
    UNDEFINED = 21


class JobControlMode(Enum):
    """Session-wide policy for granting terminal control to launched jobs."""

    ALL = 'all'
    INTERACTIVE = 'interactive'
    NONE = 'none'


class AliasEntry(BaseModel):
    """A subcommand name and the action it selects."""

    model_config = ConfigDict(frozen=True)

    action: Action
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the alias name is not empty."""
        if not v:
            msg = 'Alias name cannot be empty'
            raise ValueError(msg)
        return v


class StatusOptions(BaseModel):
    """Working record filled in while scanning the command's flags."""

    model_config = ConfigDict(validate_assignment=True)

    level: int = Field(default=1, ge=0)
    requested_job_control_mode: JobControlMode | None = None
    action: Action = Action.UNDEFINED
    print_help: bool = False


class FeatureDescriptor(BaseModel):
    """A feature flag as reported by the feature registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    enabled: bool
    groups: str
    description: str


class StatusVars(BaseModel):
    """Per-invocation strings recorded by the interpreter."""

    command: str = ''
    commandline: str = ''


class LibData(BaseModel):
    """Interpreter data consulted by the status command."""

    is_subshell: bool = False
    status_vars: StatusVars = Field(default_factory=StatusVars)


class StatusResult(BaseModel):
    """Captured outcome of one status invocation."""

    exit_code: int
    stdout: str = ''
    stderr: str = ''
