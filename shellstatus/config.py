"""Utilities for reading shellstatus configuration from YAML."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shellstatus.errors import InvalidJobControlModeError
from shellstatus.features import FeatureRegistry, UnknownFeatureError
from shellstatus.job_control import parse_job_control_mode
from shellstatus.logging import get_logger
from shellstatus.models import JobControlMode
from shellstatus.session import ScriptContext, SessionFlags, StatusEnvironment

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = 'shellstatus.config.yaml'
CONFIG_ENV_VAR = 'SHELLSTATUS_CONFIG'


class StatusConfigError(RuntimeError):
    """Raised when shellstatus configuration is invalid."""


class StatusConfig(BaseModel):
    """Top-level configuration documented in shellstatus.config.yaml."""

    model_config = ConfigDict(extra='forbid')

    program_name: str = 'fish'
    login: bool = False
    interactive: bool = False
    job_control: JobControlMode = JobControlMode.INTERACTIVE
    features: dict[str, bool] = Field(default_factory=dict)
    verbose: bool = False
    context: ScriptContext = Field(default_factory=ScriptContext)

    @field_validator('job_control', mode='before')
    @classmethod
    def validate_job_control(cls, v: Any) -> Any:
        """Accept the same mode names as ``status job-control``."""
        if isinstance(v, str):
            try:
                return parse_job_control_mode(v)
            except InvalidJobControlModeError as exc:
                msg = f'invalid job control mode {v!r}; expected full, interactive or none'
                raise ValueError(msg) from exc
        return v

    @field_validator('program_name')
    @classmethod
    def validate_program_name(cls, v: str) -> str:
        """Validate that program name is not empty."""
        if not v.strip():
            msg = 'program_name cannot be empty'
            raise ValueError(msg)
        return v.strip()


def resolve_config_path(explicit: Path | None = None) -> Path:
    """Pick the configuration file: explicit path, environment, then default."""
    if explicit is not None:
        return explicit
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    logger.debug('loading_config', config=str(config_path))
    try:
        with config_path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        msg = f'failed to parse YAML: {exc}'
        raise StatusConfigError(msg) from exc

    if not isinstance(data, dict):
        msg = f'configuration root must be a mapping in {config_path}'
        raise StatusConfigError(msg)

    return data


def load_config(config_path: Path) -> StatusConfig:
    """Load configuration, falling back to defaults when the file is absent.

    Raises:
        StatusConfigError: If the file exists but is not a valid configuration.
    """
    if not config_path.exists():
        logger.debug('config_not_found_using_defaults', config=str(config_path))
        return StatusConfig()

    data = _load_yaml_config(config_path)
    try:
        config = StatusConfig.model_validate(data)
    except ValidationError as exc:
        msg = f'invalid configuration in {config_path}: {exc}'
        raise StatusConfigError(msg) from exc

    logger.debug('loaded_config', config=str(config_path), _verbose_config=config.model_dump(mode='json'))
    return config


def build_environment(config: StatusConfig) -> StatusEnvironment:
    """Create the interpreter stand-ins described by a configuration.

    Raises:
        StatusConfigError: If the configuration overrides an unknown feature.
    """
    try:
        features = FeatureRegistry(overrides=config.features)
    except UnknownFeatureError as exc:
        msg = f'unknown feature in configuration: {exc.args[0]}'
        raise StatusConfigError(msg) from exc

    return StatusEnvironment(
        parser=config.context,
        session=SessionFlags(login=config.login, interactive=config.interactive),
        features=features,
        program_name=config.program_name,
    )
