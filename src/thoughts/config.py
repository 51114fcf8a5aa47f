"""Configuration: explicit settings for init, sync and metadata.

Every input the core needs is carried by :class:`ThoughtsConfig` so that
nothing below the CLI reads the environment directly.
"""

from __future__ import annotations

import getpass
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from thoughts.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_THOUGHTS_DIR = "thoughts"
DEFAULT_INDEX_DIR = "searchable"
DEFAULT_SUFFIX = ".md"
CONFIG_FILENAME = "config.yml"

_LINK_MODES = ("auto", "symlink")


@dataclass(frozen=True)
class ThoughtsConfig:
    """Resolved settings for one project."""

    project_root: Path
    username: str
    thoughts_dir: str = DEFAULT_THOUGHTS_DIR
    index_dir: str = DEFAULT_INDEX_DIR
    suffix: str = DEFAULT_SUFFIX
    debug: bool = False
    prefer_hardlinks: bool = True

    @property
    def source_root(self) -> Path:
        return self.project_root / self.thoughts_dir

    @property
    def index_root(self) -> Path:
        return self.source_root / self.index_dir


def _default_username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "user"


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """Load ``config.yml``; a missing or empty file yields ``{}``."""
    if not config_path.is_file():
        return {}

    import yaml

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path}: invalid YAML ({exc})") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: expected a mapping at top level")
    return data


def _validate_index_dir(value: object) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError("index_dir must be a non-empty string")
    if "/" in value or "\\" in value or value in (".", ".."):
        raise ConfigError(f"index_dir must be a single directory name, got {value!r}")
    return value


def _validate_suffix(value: object) -> str:
    if not isinstance(value, str) or not value.startswith(".") or len(value) < 2:
        raise ConfigError(f"suffix must look like '.md', got {value!r}")
    return value


def load_config(
    project_root: Path,
    *,
    env: Mapping[str, str] | None = None,
) -> ThoughtsConfig:
    """Resolve configuration for *project_root*.

    Precedence, lowest first: built-in defaults, ``thoughts/config.yml``,
    then the environment (``THOUGHTS_USER``, ``THOUGHTS_DEBUG``).

    Parameters
    ----------
    project_root:
        Directory that contains (or will contain) ``thoughts/``.
    env:
        Environment mapping.  Defaults to :data:`os.environ`; tests pass a
        plain dict to stay deterministic.
    """
    if env is None:
        env = os.environ

    data = _read_config_file(project_root / DEFAULT_THOUGHTS_DIR / CONFIG_FILENAME)

    username = data.get("user")
    if username is not None and not isinstance(username, str):
        raise ConfigError("user must be a string")

    index_dir = _validate_index_dir(data.get("index_dir", DEFAULT_INDEX_DIR))
    suffix = _validate_suffix(data.get("suffix", DEFAULT_SUFFIX))

    link_mode = data.get("link_mode", "auto")
    if link_mode not in _LINK_MODES:
        raise ConfigError(
            f"link_mode must be one of {', '.join(_LINK_MODES)}, got {link_mode!r}"
        )

    env_user = env.get("THOUGHTS_USER")
    if env_user:
        username = env_user

    return ThoughtsConfig(
        project_root=project_root,
        username=username or _default_username(),
        index_dir=index_dir,
        suffix=suffix,
        debug=env.get("THOUGHTS_DEBUG") == "1",
        prefer_hardlinks=link_mode == "auto",
    )
