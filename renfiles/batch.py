"""Batch orchestration: classify and move every candidate in turn."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Tuple

from .classifier import ClassificationEngine
from .config import RunConfig
from .labels import LabelAssigner
from .logger import log_event
from .models import BatchSummary, CandidateFile, MoveOutcome
from .mover import MoveExecutor

LOGGER_NAME = "renfiles.batch"


class BatchRunner:
    """Coordinate classification and moving for a list of candidates."""

    def __init__(
        self,
        config: RunConfig,
        *,
        classifier: Optional[ClassificationEngine] = None,
        executor: Optional[MoveExecutor] = None,
        labeler: Optional[LabelAssigner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.classifier = classifier or ClassificationEngine(verbose=config.verbose)
        self.executor = executor or MoveExecutor(config, labeler)

    def iter_outcomes(
        self, candidates: Iterable[CandidateFile]
    ) -> Iterator[Tuple[CandidateFile, Optional[MoveOutcome]]]:
        """Yield ``(candidate, outcome)`` pairs in input order.

        ``outcome`` is ``None`` for unrecognized names. Errors for a single file
        are turned into a failed outcome. Directories are not yielded.
        """

        for candidate in candidates:
            try:
                is_dir = candidate.path.is_dir()
            except OSError as exc:
                yield candidate, self._failure(candidate, exc)
                continue
            if is_dir:
                log_event(
                    self.logger,
                    level=logging.DEBUG,
                    action="batch.ignore_dir",
                    message=f"Ignoring directory {candidate.path}",
                    file_name=candidate.name,
                )
                continue
            yield candidate, self._process(candidate)

    def run(self, candidates: Iterable[CandidateFile]) -> BatchSummary:
        summary = BatchSummary()
        listed = list(candidates)
        for candidate, outcome in self.iter_outcomes(listed):
            if outcome is None:
                summary.skipped += 1
            elif outcome.success:
                summary.processed += 1
            else:
                summary.failed += 1
                summary.errors.append(f"{candidate.name}: {outcome.error}")
        summary.ignored = len(listed) - summary.total

        log_event(
            self.logger,
            level=logging.INFO,
            action="batch.complete",
            message=(
                f"Processed {summary.processed}, skipped {summary.skipped}, "
                f"failed {summary.failed} file(s)"
            ),
            extra={"dry_run": self.config.dry_run, **summary.to_dict()},
        )
        return summary

    def _process(self, candidate: CandidateFile) -> Optional[MoveOutcome]:
        try:
            classification = self.classifier.classify(candidate.name)
            return self.executor.execute(candidate, classification)
        except Exception as exc:  # noqa: BLE001
            return self._failure(candidate, exc)

    def _failure(self, candidate: CandidateFile, exc: Exception) -> MoveOutcome:
        log_event(
            self.logger,
            level=logging.ERROR,
            action="batch.file_error",
            message=f"Failed to handle {candidate.name}: {exc}",
            file_name=candidate.name,
        )
        return MoveOutcome(source=candidate.path, destination=None, success=False, error=str(exc))


__all__ = ["BatchRunner"]
