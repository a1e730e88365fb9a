import json
import logging
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# Assistant config roots that get a `skills` link, in output order.
DEFAULT_CONTAINERS = [
    ".agent",
    ".claude",
    ".cline",
    ".factory",
    ".goose",
    ".kilocode",
    ".kiro",
    ".pi",
    ".roo",
    ".windsurf",
]
DEFAULT_TARGET = ".agents/skills"
DEFAULT_LINK_NAME = "skills"


def _check_relative(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} must not be empty")
    if PurePosixPath(value).is_absolute() or PureWindowsPath(value).is_absolute():
        raise ValueError(f"{what} must be relative to the repository root: {value!r}")
    if ".." in PurePosixPath(value.replace("\\", "/")).parts:
        raise ValueError(f"{what} must not contain '..': {value!r}")
    return value


def _normalize(value: str) -> PurePosixPath:
    # ".claude", "./.claude" and ".claude/" name the same directory
    return PurePosixPath(value.replace("\\", "/"))


class LinkConfig(BaseModel):
    """Which container directories get a link, and where it points."""

    model_config = ConfigDict(extra="forbid")

    containers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTAINERS),
        description="Container directories, relative to the repository root.",
    )
    target: str = Field(
        default=DEFAULT_TARGET,
        description="Canonical skills directory, relative to the repository root.",
    )
    link_name: str = Field(
        default=DEFAULT_LINK_NAME,
        description="Name of the symlink created inside each container.",
    )

    @field_validator("containers")
    @classmethod
    def validate_containers(cls, v):
        seen = set()
        for name in v:
            _check_relative(name, "Container")
            key = _normalize(name).as_posix()
            if key == ".":
                raise ValueError(f"Container must not be the repository root: {name!r}")
            if key in seen:
                raise ValueError(f"Duplicate container: {name!r}")
            seen.add(key)
        return v

    @field_validator("target")
    @classmethod
    def validate_target(cls, v):
        return _check_relative(v, "Target")

    @field_validator("link_name")
    @classmethod
    def validate_link_name(cls, v):
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"Link name must be a single path component: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_containers_outside_target(self):
        target = _normalize(self.target)
        for name in self.containers:
            container = _normalize(name)
            if container == target or target in container.parents:
                raise ValueError(
                    f"Container {name!r} lies inside the target {self.target!r}; "
                    f"its link would point at itself"
                )
        return self


def load_config(path: Union[str, Path]) -> LinkConfig:
    """Load a LinkConfig from a YAML or JSON file.

    Keys that are left out keep their defaults, and an empty file gives the
    default configuration.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        elif path.suffix == ".json":
            text = f.read()
            data = json.loads(text) if text.strip() else None
        else:
            raise ValueError(f"Unsupported file extension: {path.suffix}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    bad_keys = [k for k in data if not isinstance(k, str)]
    if bad_keys:
        raise ValueError(f"Config file {path} has non-string keys: {bad_keys!r}")

    logger.debug(f"Loaded link config from {path}: {data}")
    return LinkConfig.model_validate(data)


def resolve_root(root: Optional[Union[str, Path]] = None) -> Path:
    """Return the absolute repository root; defaults to the working directory."""
    resolved = Path(root).expanduser() if root is not None else Path.cwd()
    resolved = resolved.absolute()
    if not resolved.is_dir():
        raise NotADirectoryError(f"Repository root is not a directory: {resolved}")
    return resolved
