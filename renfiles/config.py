"""Configuration and run options for renfiles."""

from __future__ import annotations

import configparser
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_PROPERTIES_FILE = Path("renfiles.properties")
DEFAULT_TAG_COMMAND = "/usr/local/bin/tag"
_SECTION = "renfiles"


class ConfigError(Exception):
    """Raised when the properties file cannot be parsed."""


class ExecutionMode(str, Enum):
    """Whether the mover touches the filesystem."""

    LIVE = "live"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class RunConfig:
    """Resolved options threaded through the classifier, mover and batch runner."""

    source_dir: Path = Path(".")
    dest_dir: Path = Path(".")
    mode: ExecutionMode = ExecutionMode.LIVE
    verbose: bool = False
    tag_command: str = DEFAULT_TAG_COMMAND

    @property
    def dry_run(self) -> bool:
        return self.mode is ExecutionMode.DRY_RUN


def load_properties(path: Path) -> Dict[str, str]:
    """Read a Java style ``key=value`` properties file.

    Keys keep their case. Lines starting with ``#`` or ``!`` are comments.
    """

    if not path.exists():
        raise FileNotFoundError(f"Properties file not found: {path}")

    parser = configparser.ConfigParser(
        interpolation=None,
        comment_prefixes=("#", "!"),
        delimiters=("=", ":"),
        strict=False,
    )
    parser.optionxform = str  # type: ignore[assignment]
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Properties file {path} is not UTF-8: {exc}") from exc
    try:
        parser.read_string(f"[{_SECTION}]\n{content}", source=str(path))
    except configparser.Error as exc:
        raise ConfigError(f"Invalid properties file {path}: {exc}") from exc
    return dict(parser.items(_SECTION))


def resolve_config(
    properties: Optional[Mapping[str, str]] = None,
    *,
    source_dir: Optional[Path] = None,
    dest_dir: Optional[Path] = None,
    dry_run: bool = False,
    verbose: bool = False,
) -> RunConfig:
    """Combine defaults, properties and command line overrides, in that order."""

    props = properties or {}
    source = source_dir or Path(props.get("srcDirName", ".")).expanduser()
    dest = dest_dir or Path(props.get("destDirName", ".")).expanduser()
    return RunConfig(
        source_dir=source,
        dest_dir=dest,
        mode=ExecutionMode.DRY_RUN if dry_run else ExecutionMode.LIVE,
        verbose=verbose,
        tag_command=props.get("tagCommand", DEFAULT_TAG_COMMAND),
    )


__all__ = [
    "ConfigError",
    "DEFAULT_PROPERTIES_FILE",
    "DEFAULT_TAG_COMMAND",
    "ExecutionMode",
    "RunConfig",
    "load_properties",
    "resolve_config",
]
