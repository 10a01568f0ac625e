"""Centralized path management for skatmoms."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    # runtime/paths.py -> runtime -> project root
    return Path(__file__).parent.parent


@dataclass
class ProjectPaths:
    """Container for project-related paths, relative to the project root."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def settings_file(self) -> Path:
        """Settings TOML file. ``SKATMOMS_CONFIG`` overrides the default location."""
        override = os.environ.get("SKATMOMS_CONFIG")
        if override:
            return Path(override).expanduser()
        return self.config / "skatmoms.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths
