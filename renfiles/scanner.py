"""Source directory listing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from .logger import log_event
from .models import CandidateFile

LOGGER_NAME = "renfiles.scanner"
PDF_SUFFIX = ".pdf"


def list_pdf_candidates(source_dir: Path, *, logger: logging.Logger | None = None) -> List[CandidateFile]:
    """Return the PDF entries of *source_dir*, sorted by name.

    Only the top level is listed. An unreadable or missing directory raises
    :class:`OSError`, which aborts the run.
    """

    logger = logger or logging.getLogger(LOGGER_NAME)
    directory = source_dir.expanduser().resolve()
    candidates: List[CandidateFile] = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.name.lower().endswith(PDF_SUFFIX):
                candidates.append(CandidateFile(directory=directory, name=entry.name))

    candidates.sort(key=lambda candidate: candidate.name)
    log_event(
        logger,
        level=logging.INFO,
        action="scan.complete",
        message=f"Found {len(candidates)} pdf file(s) in {directory}",
        extra={"path": str(directory), "count": len(candidates)},
    )
    return candidates


__all__ = ["list_pdf_candidates"]
