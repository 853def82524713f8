"""Move classified files into the destination tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .config import RunConfig
from .labels import NO_LABELS_MESSAGE, LabelAssigner, NullLabeler, join_labels
from .logger import log_event
from .models import CandidateFile, Classification, MoveOutcome

LOGGER_NAME = "renfiles.mover"


class MoveExecutor:
    """Create the destination directory, rename the file and request labels.

    In dry-run mode only the report lines are produced; they are echoed (to
    stdout by default) and kept in :attr:`MoveOutcome.actions`.
    """

    def __init__(
        self,
        config: RunConfig,
        labeler: Optional[LabelAssigner] = None,
        *,
        logger: Optional[logging.Logger] = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.config = config
        self.labeler: LabelAssigner = labeler or NullLabeler()
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.echo = echo

    def destination_for(self, classification: Classification) -> Path:
        """Absolute destination path; identical in live and dry-run mode."""

        root = self.config.dest_dir.expanduser().resolve()
        directory = root / classification.subdir if classification.subdir else root
        return directory / classification.dest_name

    def execute(self, candidate: CandidateFile, classification: Optional[Classification]) -> Optional[MoveOutcome]:
        if classification is None:
            return None

        destination = self.destination_for(classification)
        if self.config.dry_run:
            return self._plan(candidate, classification, destination)
        return self._move(candidate, classification, destination)

    def _plan(self, candidate: CandidateFile, classification: Classification, destination: Path) -> MoveOutcome:
        actions = [
            f"mkdir {destination.parent}",
            f"mv {candidate.name} {destination}",
        ]
        if classification.labels:
            actions.append(self.labeler.describe(destination, classification.labels))
        else:
            actions.append(NO_LABELS_MESSAGE)

        for line in actions:
            self.echo(line)
        log_event(
            self.logger,
            level=logging.INFO,
            action="move.plan",
            message=f"Would move {candidate.path} -> {destination}",
            file_name=candidate.name,
            extra={"destination": str(destination), "labels": sorted(classification.labels)},
        )
        return MoveOutcome(
            source=candidate.path,
            destination=destination,
            success=True,
            dry_run=True,
            actions=actions,
        )

    def _move(self, candidate: CandidateFile, classification: Classification, destination: Path) -> MoveOutcome:
        source = candidate.path
        if source.resolve() == destination:
            log_event(
                self.logger,
                level=logging.INFO,
                action="move.in_place",
                message=f"{candidate.name} is already at {destination}",
                file_name=candidate.name,
            )
            return MoveOutcome(source=source, destination=destination, success=True)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists():
                raise FileExistsError(f"Destination already exists: {destination}")
            source.rename(destination)
        except OSError as exc:
            log_event(
                self.logger,
                level=logging.ERROR,
                action="move.failed",
                message=f"Conversion of {candidate.name} failed: {exc}",
                file_name=candidate.name,
                extra={"source": str(source), "destination": str(destination)},
            )
            return MoveOutcome(source=source, destination=destination, success=False, error=str(exc))

        log_event(
            self.logger,
            level=logging.INFO,
            action="move.rename",
            message=f"Moved {source} -> {destination}",
            file_name=candidate.name,
        )
        outcome = MoveOutcome(source=source, destination=destination, success=True)
        if classification.labels:
            outcome.labeled = self._label(destination, classification)
        return outcome

    def _label(self, destination: Path, classification: Classification) -> bool:
        try:
            self.labeler.assign(destination, classification.labels)
        except Exception as exc:  # noqa: BLE001 - the move already happened
            log_event(
                self.logger,
                level=logging.WARNING,
                action="label.failed",
                message=f"Could not label {destination} with {join_labels(classification.labels)}: {exc}",
                extra={"path": str(destination)},
            )
            return False
        return True


__all__ = ["MoveExecutor"]
