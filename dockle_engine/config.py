"""Engine settings loaded from ``DOCKLE_*`` environment variables."""

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class EngineSettings(BaseModel):
    """Knobs shared by the locator, the detector and the remediator."""

    model_config = ConfigDict(frozen=True)

    dockerfile_names: List[str] = Field(default_factory=lambda: ["dockerfile"])
    compose_name: str = "docker-compose.yaml"
    dockerignore_name: str = ".dockerignore"
    backup_suffix: str = ".bak"
    # Trim leading whitespace before every instruction keyword check
    normalize_whitespace: bool = False
    max_run_instructions: int = Field(default=3, ge=0)
    non_root_user: str = "appuser"
    log_level: str = "INFO"

    @field_validator("dockerfile_names")
    @classmethod
    def _check_dockerfile_names(cls, names: List[str]) -> List[str]:
        cleaned = [name.strip() for name in names if name.strip()]
        if not cleaned:
            raise ValueError("at least one Dockerfile name is required")
        for name in cleaned:
            if "/" in name or "\\" in name:
                raise ValueError(f"Dockerfile name must be a bare file name: {name!r}")
        return cleaned

    @field_validator("backup_suffix")
    @classmethod
    def _check_backup_suffix(cls, suffix: str) -> str:
        if not suffix:
            raise ValueError("backup suffix must not be empty")
        return suffix

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, level: str) -> str:
        level = level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {level}")
        return level


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from the environment.

    Recognized variables:
        DOCKLE_DOCKERFILE_NAMES: comma-separated accepted Dockerfile names
        DOCKLE_COMPOSE_NAME, DOCKLE_DOCKERIGNORE_NAME, DOCKLE_BACKUP_SUFFIX
        DOCKLE_NORMALIZE_WHITESPACE: boolean
        DOCKLE_MAX_RUN_INSTRUCTIONS: integer
        DOCKLE_NON_ROOT_USER, DOCKLE_LOG_LEVEL

    Raises:
        ValueError: if a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    values = {}

    if "DOCKLE_DOCKERFILE_NAMES" in env:
        values["dockerfile_names"] = env["DOCKLE_DOCKERFILE_NAMES"].split(",")
    for key in ("compose_name", "dockerignore_name", "backup_suffix", "non_root_user", "log_level"):
        env_key = f"DOCKLE_{key.upper()}"
        if env_key in env:
            values[key] = env[env_key]
    if "DOCKLE_NORMALIZE_WHITESPACE" in env:
        values["normalize_whitespace"] = _parse_bool(
            "DOCKLE_NORMALIZE_WHITESPACE", env["DOCKLE_NORMALIZE_WHITESPACE"]
        )
    if "DOCKLE_MAX_RUN_INSTRUCTIONS" in env:
        raw = env["DOCKLE_MAX_RUN_INSTRUCTIONS"]
        try:
            values["max_run_instructions"] = int(raw)
        except ValueError:
            raise ValueError(f"DOCKLE_MAX_RUN_INSTRUCTIONS must be an integer, got {raw!r}")

    return EngineSettings(**values)
