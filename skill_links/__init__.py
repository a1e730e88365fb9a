"""
skill-links

Keeps every AI assistant's skills folder pointed at the shared .agents/skills directory.
"""

__version__ = "1.0.0"

from .config import (
    DEFAULT_CONTAINERS,
    DEFAULT_LINK_NAME,
    DEFAULT_TARGET,
    LinkConfig,
    load_config,
    resolve_root,
)
from .linker import (
    BlockedLinkPath,
    DirectoryCreationFailure,
    LinkCreationFailure,
    LinkReport,
    LinkResult,
    LinkStatus,
    SkillLinkError,
    bootstrap_links,
    check_links,
    link_container,
)

__all__ = [
    "DEFAULT_CONTAINERS",
    "DEFAULT_LINK_NAME",
    "DEFAULT_TARGET",
    "LinkConfig",
    "load_config",
    "resolve_root",
    "BlockedLinkPath",
    "DirectoryCreationFailure",
    "LinkCreationFailure",
    "LinkReport",
    "LinkResult",
    "LinkStatus",
    "SkillLinkError",
    "bootstrap_links",
    "check_links",
    "link_container",
]
