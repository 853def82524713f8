"""Ordered rule catalog used by the classification engine.

Each rule is a small declarative value that knows how to test a file name and
how to build the resulting :class:`~renfiles.models.Classification`. The
engine walks :data:`DEFAULT_RULES` in order and the first matching rule wins,
so the position of a rule in the catalog is part of its behavior.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Union

from .dates import DatePrecision, LeadingDate
from .models import Classification

KEYWORD_OFFSET = 8
NEWS_LABELS = frozenset({"dNews"})
MINUTES_LABELS = frozenset({"oAdnovum", "dMinutes", "lZuerich"})

OWNER_ALIASES: Mapping[str, str] = {
    "toms": "Toms",
    "kornel": "Kornel",
    "ksh": "Kornel",
    "christof": "Christof",
    "cdo": "Christof",
    "christian": "Christian",
    "crw": "Christian",
    "bruno": "Bruno",
    "bka": "Bruno",
}


class MalformedNameError(ValueError):
    """Raised when a name matches a rule but lacks the fields the rule needs."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(f"{file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


@dataclass(frozen=True, slots=True)
class _SliceRule:
    """Build the destination from fixed character ranges of the name."""

    name: str
    pattern: str
    slices: tuple[tuple[int, int], ...]
    name_template: str
    subdir_template: str
    labels: frozenset[str] = NEWS_LABELS

    def matches(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> bool:
        raise NotImplementedError

    def build(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> Classification:
        required = max(end for _, end in self.slices)
        if len(file_name) < required:
            raise MalformedNameError(
                file_name, f"rule {self.name} needs at least {required} characters"
            )
        key = "".join(file_name[start:end] for start, end in self.slices)
        return Classification(
            dest_name=self.name_template.format(key=key),
            subdir=self.subdir_template.format(key=key),
            labels=self.labels,
            rule=self.name,
        )


@dataclass(frozen=True, slots=True)
class PrefixRule(_SliceRule):
    def matches(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> bool:
        return file_name.startswith(self.pattern)


@dataclass(frozen=True, slots=True)
class SuffixRule(_SliceRule):
    def matches(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> bool:
        return file_name.endswith(self.pattern)


@dataclass(frozen=True, slots=True)
class TokenRule:
    """Meeting minutes named by ``_`` separated tokens in any order.

    Owner aliases are matched case-insensitively and a 12 character token
    starting with ``2`` (``YYYYMMDDhhmm``) provides the meeting date. When
    several tokens qualify the last one wins.
    """

    name: str
    prefix: str
    aliases: Mapping[str, str]
    name_template: str
    subdir_template: str
    labels: frozenset[str] = MINUTES_LABELS

    def matches(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> bool:
        return file_name.startswith(self.prefix)

    def build(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> Classification:
        stem, _ = os.path.splitext(file_name)
        owner = ""
        meet_date = ""
        ignored: list[str] = []
        for token in filter(None, stem[len(self.prefix):].split("_")):
            alias = self.aliases.get(token.lower())
            if alias is not None:
                owner = alias
            elif len(token) == 12 and token.startswith("2"):
                meet_date = token[0:8]
            else:
                ignored.append(token)

        if not meet_date:
            raise MalformedNameError(file_name, f"rule {self.name} found no meeting date token")

        notes = [f"ignored token {token!r}" for token in ignored]
        if not owner:
            notes.append("no owner token")
        return Classification(
            dest_name=self.name_template.format(date=meet_date, owner=owner),
            subdir=self.subdir_template.format(date=meet_date),
            labels=self.labels,
            rule=self.name,
            notes=tuple(notes),
        )


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Content keyword tested against a dated name from character 8 on."""

    keyword: str
    subdir: str
    labels: frozenset[str]
    min_precision: DatePrecision = DatePrecision.YEAR_MONTH
    rule_type: str = "prefix"

    def matches(self, date: LeadingDate, remainder: str) -> bool:
        if date.precision < self.min_precision:
            return False
        if self.rule_type == "prefix":
            return remainder.startswith(self.keyword)
        if self.rule_type == "suffix_ci":
            return remainder.lower().endswith(self.keyword.lower())
        return False


@dataclass(frozen=True, slots=True)
class DatedRule:
    """Fallback for names with a leading date.

    The name is kept as is. Keywords are read from character 8 on, whatever
    the precision of the date; each keyword sets its own minimum precision.
    Without a keyword match the file still goes to the destination root,
    unlabeled.
    """

    name: str
    keywords: tuple[KeywordRule, ...] = field(default=())

    def matches(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> bool:
        return date is not None

    def build(self, file_name: str, date: LeadingDate | None, remainder: str | None) -> Classification:
        if date is None:
            raise MalformedNameError(file_name, f"rule {self.name} needs a leading date")
        rest = remainder if remainder is not None else file_name[KEYWORD_OFFSET:]
        for keyword in self.keywords:
            if keyword.matches(date, rest):
                return Classification(
                    dest_name=file_name,
                    subdir=keyword.subdir.format(year=date.raw[0:4]),
                    labels=keyword.labels,
                    rule=f"{self.name}:{keyword.keyword}",
                )
        return Classification(dest_name=file_name, subdir="", rule=self.name)


Rule = Union[PrefixRule, SuffixRule, TokenRule, DatedRule]


def _labels(*names: str) -> frozenset[str]:
    return frozenset(names)


KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("ic", "finance/ic", _labels("oIc", "dStatement")),
    KeywordRule("rg", "finance/rechnungen/{year}", _labels("dInvoice")),
    KeywordRule("zkb", "finance/zkb/{year}", _labels("oZkb", "dStatement")),
    KeywordRule("pf", "finance/postfinance/{year}", _labels("oPostfinance", "dStatement")),
    KeywordRule("lohn", "finance/lohn/{year}", _labels("dSalary")),
    KeywordRule("slkk", "health/slkk/{year}", _labels("oSlkk", "dInsurance")),
    KeywordRule("mmb", "finance/migrosbank", _labels("oMigrosbank", "dStatement")),
    KeywordRule("karte", "private/karten", _labels("dCard")),
    KeywordRule("diary", "private/diary/{year}", _labels("dDiary")),
    KeywordRule("abstract_", "abstract/{year}", _labels("dAbstract"), min_precision=DatePrecision.YEAR),
    KeywordRule("kof", "economy/kof", _labels("oKof", "dReport", "tEconomy")),
    KeywordRule("book", "books", _labels("dBook")),
    KeywordRule("sise", "sise/{year}", _labels("oSise", "dMagazine")),
    KeywordRule("awuz", "awuz/{year}", _labels("oAwuz", "dMinutes")),
    KeywordRule("informatikSpektrum", "informatikSpektrum", _labels("oGi", "dMagazine", "tTech")),
    KeywordRule("pres.pdf", "presentations/{year}", _labels("dPresentation"), rule_type="suffix_ci"),
    KeywordRule("itc", "adnovum/itc", _labels("oAdnovum", "dMinutes")),
    KeywordRule("swd", "adnovum/swd", _labels("oAdnovum", "dMinutes")),
    KeywordRule("sla", "contracts/sla", _labels("dContract", "dSla")),
    KeywordRule("nda", "contracts/nda", _labels("dContract", "dNda")),
    KeywordRule("offer", "offers/{year}", _labels("dOffer")),
)


DEFAULT_RULES: tuple[Rule, ...] = (
    PrefixRule("nzzs", "NZZS_", ((5, 13),), "{key}nzzs.pdf", "nzzs"),
    PrefixRule("nzz", "NZZ_", ((4, 12),), "{key}nzz.pdf", "nzz"),
    SuffixRule("zsz", "_zsr.pdf", ((0, 8),), "{key}zsz.pdf", "zsz"),
    PrefixRule("20min", "ZH_", ((3, 11),), "{key}_20min.pdf", "20min"),
    PrefixRule(
        "tagesanzeiger", "taz-ges-", ((8, 12), (13, 15), (16, 18)), "{key}tagesanzeiger.pdf", "tagesanzeiger"
    ),
    PrefixRule(
        "sonntagszeitung", "sonze-", ((6, 10), (11, 13), (14, 16)), "{key}sonntagszeitung.pdf", "sonntagszeitung"
    ),
    PrefixRule("nzzEquity", "EQUITY_", ((7, 15),), "{key}nzzEquity.pdf", "nzzEquity"),
    PrefixRule("nzzFolio", "FOLIO_", ((6, 14),), "{key}nzzFolio.pdf", "nzzFolio"),
    PrefixRule("nzzGesellschaft", "GESE_", ((5, 13),), "{key}nzzGesellschaft.pdf", "nzzGesellschaft"),
    PrefixRule(
        "acmCommunications",
        "communications",
        ((14, 20),),
        "{key}00acmCommunications.pdf",
        "acmCommunications",
        _labels("oAcm", "dMagazine", "tTech"),
    ),
    PrefixRule(
        "computerworld",
        "compw-",
        ((6, 10), (11, 13), (14, 16)),
        "{key}computerworld.pdf",
        "computerworld",
        _labels("dNews", "tTech"),
    ),
    TokenRule("glinput", "input_gl", OWNER_ALIASES, "{date}glinput{owner}.pdf", "{date}gl"),
    PrefixRule("mmgl", "kw", ((13, 21),), "{key}mmgl.pdf", "{key}gl", MINUTES_LABELS),
    DatedRule("dated", KEYWORD_RULES),
)


__all__ = [
    "DEFAULT_RULES",
    "DatedRule",
    "KEYWORD_OFFSET",
    "KEYWORD_RULES",
    "KeywordRule",
    "MalformedNameError",
    "OWNER_ALIASES",
    "PrefixRule",
    "Rule",
    "SuffixRule",
    "TokenRule",
]
