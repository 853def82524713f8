"""renfiles package exports."""

from .batch import BatchRunner
from .classifier import ClassificationEngine
from .cli import main as cli_main
from .dates import DatePrecision, LeadingDate, extract_leading_date
from .models import BatchSummary, CandidateFile, Classification, MoveOutcome
from .mover import MoveExecutor

__all__ = [
    "BatchRunner",
    "BatchSummary",
    "CandidateFile",
    "Classification",
    "ClassificationEngine",
    "DatePrecision",
    "LeadingDate",
    "MoveExecutor",
    "MoveOutcome",
    "cli_main",
    "extract_leading_date",
]
