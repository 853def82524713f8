"""Leading date extraction for file names such as ``20230405report.pdf``."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_DIGITS = frozenset("0123456789")
_YEAR_RANGE = (1, 2999)
_MONTH_RANGE = (1, 12)
_DAY_RANGE = (1, 31)


class DatePrecision(int, Enum):
    """Precision of a leading date, valued by the number of characters used."""

    YEAR = 4
    YEAR_MONTH = 6
    YEAR_MONTH_DAY = 8


@dataclass(frozen=True, slots=True)
class LeadingDate:
    """Numeric date prefix of a file name.

    Only the field ranges are validated; ``20230231`` is accepted.
    """

    raw: str
    precision: DatePrecision

    @property
    def year(self) -> int:
        return int(self.raw[0:4])

    @property
    def month(self) -> int | None:
        if self.precision < DatePrecision.YEAR_MONTH:
            return None
        return int(self.raw[4:6])

    @property
    def day(self) -> int | None:
        if self.precision < DatePrecision.YEAR_MONTH_DAY:
            return None
        return int(self.raw[6:8])


def _parse_field(text: str, bounds: tuple[int, int]) -> int | None:
    if not text or not set(text) <= _DIGITS:
        return None
    value = int(text)
    low, high = bounds
    if low <= value <= high:
        return value
    return None


def extract_leading_date(name: str) -> LeadingDate | None:
    """Return the longest valid ``YYYY[MM[DD]]`` prefix of *name*, if any."""

    if len(name) < 4 or _parse_field(name[0:4], _YEAR_RANGE) is None:
        return None

    precision = DatePrecision.YEAR
    if len(name) >= 6 and _parse_field(name[4:6], _MONTH_RANGE) is not None:
        precision = DatePrecision.YEAR_MONTH
        if len(name) >= 8 and _parse_field(name[6:8], _DAY_RANGE) is not None:
            precision = DatePrecision.YEAR_MONTH_DAY

    return LeadingDate(raw=name[: precision.value], precision=precision)


__all__ = ["DatePrecision", "LeadingDate", "extract_leading_date"]
