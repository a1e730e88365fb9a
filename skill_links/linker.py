# Symlink bootstrapper: points every assistant's skills folder at .agents/skills

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from .config import LinkConfig

logger = logging.getLogger(__name__)


class SkillLinkError(RuntimeError):
    """Raised when a container's skills link cannot be put in place."""

    def __init__(self, container: str, path: Path, message: str):
        super().__init__(message)
        self.container = container
        self.path = path
        self.message = message


class DirectoryCreationFailure(SkillLinkError):
    """The container directory could not be created."""


class BlockedLinkPath(SkillLinkError):
    """A real file or directory already sits where the link should go."""


class LinkCreationFailure(SkillLinkError):
    """The operating system refused to create the symlink."""


@dataclass(frozen=True)
class LinkResult:
    container: str
    link_path: Path
    link_text: str


@dataclass
class LinkReport:
    created: List[LinkResult] = field(default_factory=list)
    failures: List[SkillLinkError] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class LinkStatus:
    container: str
    link_path: Path
    expected: str
    actual: Optional[str]
    state: str  # ok | missing | wrong-target | blocked

    @property
    def ok(self) -> bool:
        return self.state == "ok"


def link_text_for(root: Path, container: str, config: LinkConfig) -> str:
    """Relative path from the container directory to the canonical target."""
    return os.path.relpath(root / config.target, root / container)


def link_container(root: Path, container: str, config: LinkConfig) -> LinkResult:
    """Make ``<root>/<container>/<link_name>`` a relative link to the target.

    An existing symlink is replaced. Anything else at the link path is left
    alone and reported as BlockedLinkPath.
    """
    container_dir = root / container
    link_path = container_dir / config.link_name
    link_text = link_text_for(root, container, config)

    try:
        container_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailure(
            container,
            container_dir,
            f"cannot create directory {container_dir}: {exc.strerror or exc}",
        ) from exc
    logger.debug(f"Ensured container directory {container_dir}")

    try:
        if link_path.is_symlink():
            logger.debug(f"Removing existing symlink {link_path} -> {os.readlink(link_path)}")
            link_path.unlink()
            blocked_kind = None
        elif link_path.exists():
            blocked_kind = "directory" if link_path.is_dir() else "file"
        else:
            blocked_kind = None
    except OSError as exc:
        raise LinkCreationFailure(
            container,
            link_path,
            f"cannot replace existing entry {link_path}: {exc.strerror or exc}",
        ) from exc

    if blocked_kind is not None:
        raise BlockedLinkPath(
            container,
            link_path,
            f"{link_path} already exists as a {blocked_kind}, not a symlink; "
            f"move it aside and re-run",
        )

    try:
        link_path.symlink_to(link_text, target_is_directory=True)
    except OSError as exc:
        raise LinkCreationFailure(
            container,
            link_path,
            f"cannot create symlink {link_path}: {exc.strerror or exc}",
        ) from exc
    logger.debug(f"Created symlink {link_path} -> {link_text}")

    return LinkResult(container=container, link_path=link_path, link_text=link_text)


def bootstrap_links(
    root: Path,
    config: Optional[LinkConfig] = None,
    on_result: Optional[Callable[[LinkResult], None]] = None,
    on_failure: Optional[Callable[[SkillLinkError], None]] = None,
) -> LinkReport:
    """Link every configured container, collecting failures instead of stopping."""
    config = config or LinkConfig()
    report = LinkReport()

    target_dir = root / config.target
    if not target_dir.is_dir():
        logger.warning(f"Canonical skills directory {target_dir} does not exist yet")

    for container in config.containers:
        try:
            result = link_container(root, container, config)
        except SkillLinkError as e:
            logger.error(f"Failed to link {container}: {e}")
            report.failures.append(e)
            if on_failure is not None:
                on_failure(e)
            continue
        report.created.append(result)
        if on_result is not None:
            on_result(result)

    logger.info(
        f"Linked {report.created_count} of {len(config.containers)} containers "
        f"under {root}"
    )
    return report


def check_links(root: Path, config: Optional[LinkConfig] = None) -> List[LinkStatus]:
    """Report the state of every configured link without changing anything."""
    config = config or LinkConfig()
    statuses = []

    for container in config.containers:
        link_path = root / container / config.link_name
        expected = link_text_for(root, container, config)
        actual = None

        if link_path.is_symlink():
            actual = os.readlink(link_path)
            state = "ok" if Path(actual) == Path(expected) else "wrong-target"
        elif link_path.exists():
            state = "blocked"
        else:
            state = "missing"

        statuses.append(
            LinkStatus(
                container=container,
                link_path=link_path,
                expected=expected,
                actual=actual,
                state=state,
            )
        )

    return statuses
