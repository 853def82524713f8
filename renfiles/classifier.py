"""Rule-based classification engine."""
from __future__ import annotations

import logging
from typing import Sequence

from .dates import extract_leading_date
from .logger import log_event
from .models import Classification
from .rules import DEFAULT_RULES, KEYWORD_OFFSET, Rule

LOGGER_NAME = "renfiles.classifier"


class ClassificationEngine:
    """Map a file name to its destination using an ordered rule catalog.

    The engine holds no per-call state: the same name always yields the same
    :class:`Classification`, or ``None`` when no rule recognizes it.
    """

    def __init__(
        self,
        rules: Sequence[Rule] | None = None,
        *,
        verbose: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self.rules: tuple[Rule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES
        self.verbose = verbose
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def classify(self, name: str) -> Classification | None:
        """Classify *name*, raising :class:`~renfiles.rules.MalformedNameError`
        when a matching rule cannot extract its fields."""

        date = extract_leading_date(name)
        remainder = name[KEYWORD_OFFSET:] if date is not None else None
        if date is not None:
            self._trace(
                "classify.date",
                f"Leading date {date.raw} in {name}",
                {"name": name, "date": date.raw, "precision": date.precision.name},
            )

        for rule in self.rules:
            if not rule.matches(name, date, remainder):
                continue
            classification = rule.build(name, date, remainder)
            for note in classification.notes:
                self._trace("classify.note", f"{name}: {note}", {"name": name, "rule": classification.rule})
            return classification

        self._trace("classify.unrecognized", f"Unrecognized file name {name}", {"name": name})
        return None

    # ------------------------------------------------------------------
    # Helpers
    def _trace(self, action: str, message: str, extra: dict[str, object]) -> None:
        level = logging.INFO if self.verbose else logging.DEBUG
        if self.logger.isEnabledFor(level):
            log_event(self.logger, level=level, action=action, message=message, extra=extra)


__all__ = ["ClassificationEngine"]
