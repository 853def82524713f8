"""Label assignment backends.

Labels are delivered to an out-of-process tool. The default backend runs the
``tag`` command line utility (``brew install tag``) which writes macOS Finder
tags; it is started and not waited for.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import AbstractSet, Protocol

from .config import DEFAULT_TAG_COMMAND
from .logger import log_event

LOGGER_NAME = "renfiles.labels"
NO_LABELS_MESSAGE = "no labels added"


class LabelingError(RuntimeError):
    """Raised when the labeling tool cannot be started."""


class LabelAssigner(Protocol):
    def assign(self, path: Path, labels: AbstractSet[str]) -> None:
        ...

    def describe(self, path: Path, labels: AbstractSet[str]) -> str:
        ...


def join_labels(labels: AbstractSet[str]) -> str:
    """Return *labels* as the sorted, comma separated list the tool expects."""

    return ",".join(sorted(labels))


class TagCommandLabeler:
    """Assign labels by launching ``<command> -a <labels> <path>``."""

    def __init__(self, command: str = DEFAULT_TAG_COMMAND, *, logger: logging.Logger | None = None) -> None:
        self.command = command
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def build_args(self, path: Path, labels: AbstractSet[str]) -> list[str]:
        return [self.command, "-a", join_labels(labels), str(path)]

    def describe(self, path: Path, labels: AbstractSet[str]) -> str:
        if not labels:
            return NO_LABELS_MESSAGE
        return " ".join(self.build_args(path, labels))

    def assign(self, path: Path, labels: AbstractSet[str]) -> None:
        if not labels:
            return
        args = self.build_args(path, labels)
        try:
            subprocess.Popen(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as exc:
            raise LabelingError(f"Cannot run {self.command}: {exc}") from exc
        log_event(
            self.logger,
            level=logging.INFO,
            action="label.request",
            message=f"Requested labels {join_labels(labels)} for {path}",
            extra={"path": str(path), "labels": sorted(labels)},
        )


class NullLabeler:
    """Labeler that never labels anything."""

    def assign(self, path: Path, labels: AbstractSet[str]) -> None:
        return None

    def describe(self, path: Path, labels: AbstractSet[str]) -> str:
        if not labels:
            return NO_LABELS_MESSAGE
        return f"labels {join_labels(labels)} not assigned (labeling disabled)"


__all__ = [
    "LabelAssigner",
    "LabelingError",
    "NO_LABELS_MESSAGE",
    "NullLabeler",
    "TagCommandLabeler",
    "join_labels",
]
