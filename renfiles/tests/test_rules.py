from __future__ import annotations

import pytest

from renfiles.dates import DatePrecision, extract_leading_date
from renfiles.rules import (
    DEFAULT_RULES,
    KEYWORD_RULES,
    DatedRule,
    KeywordRule,
    MalformedNameError,
    OWNER_ALIASES,
    TokenRule,
)


def _token_rule() -> TokenRule:
    rule = next(rule for rule in DEFAULT_RULES if isinstance(rule, TokenRule))
    assert rule.name == "glinput"
    return rule


@pytest.mark.parametrize(
    ("alias", "owner"),
    [
        ("toms", "Toms"),
        ("KORNEL", "Kornel"),
        ("ksh", "Kornel"),
        ("Christof", "Christof"),
        ("cdo", "Christof"),
        ("christian", "Christian"),
        ("CRW", "Christian"),
        ("bruno", "Bruno"),
        ("bka", "Bruno"),
    ],
)
def test_owner_aliases_are_case_insensitive(alias: str, owner: str) -> None:
    name = f"input_gl_{alias}_201402101400.pdf"
    result = _token_rule().build(name, None, None)
    assert result.dest_name == f"20140210glinput{owner}.pdf"
    assert result.subdir == "20140210gl"


def test_last_matching_token_wins() -> None:
    result = _token_rule().build("input_gl_ksh_201402101400_bka_201403031000.pdf", None, None)
    assert result.dest_name == "20140303glinputBruno.pdf"
    assert result.subdir == "20140303gl"


def test_unknown_tokens_become_notes() -> None:
    result = _token_rule().build("input_gl_toms_draft_201402101400.pdf", None, None)
    assert "ignored token 'draft'" in result.notes
    assert result.dest_name == "20140210glinputToms.pdf"


def test_missing_owner_is_noted() -> None:
    result = _token_rule().build("input_gl_201402101400.pdf", None, None)
    assert result.dest_name == "20140210glinput.pdf"
    assert "no owner token" in result.notes


def test_missing_meeting_date_is_malformed() -> None:
    with pytest.raises(MalformedNameError) as excinfo:
        _token_rule().build("input_gl_toms.pdf", None, None)
    assert excinfo.value.file_name == "input_gl_toms.pdf"


def test_date_token_must_start_with_two() -> None:
    with pytest.raises(MalformedNameError):
        _token_rule().build("input_gl_toms_101402101400.pdf", None, None)


def test_keyword_rule_precision_and_match_type() -> None:
    keyword = KeywordRule("rg", "finance", frozenset({"dInvoice"}))
    month = extract_leading_date("202304rg")
    year = extract_leading_date("2023rg")
    assert month is not None and year is not None
    assert keyword.matches(month, "rg") is True
    assert keyword.matches(year, "rg") is False

    suffix = KeywordRule("pres.pdf", "p", frozenset(), rule_type="suffix_ci")
    assert suffix.matches(month, "_talk_PRES.PDF") is True
    assert suffix.matches(month, "pres.pdf_copy") is False


def test_dated_rule_partitions_by_year() -> None:
    rule = DatedRule("dated", KEYWORD_RULES)
    name = "19990101diary.pdf"
    date = extract_leading_date(name)
    assert date is not None
    result = rule.build(name, date, name[8:])
    assert result.subdir == "private/diary/1999"
    assert result.rule == "dated:diary"


def test_dated_rule_without_date_is_malformed() -> None:
    with pytest.raises(MalformedNameError) as excinfo:
        DatedRule("dated", KEYWORD_RULES).build("foo.pdf", None, None)
    assert excinfo.value.file_name == "foo.pdf"


def test_dated_rule_reads_keywords_from_character_eight() -> None:
    rule = DatedRule("dated", KEYWORD_RULES)
    name = "202304__zkb.pdf"
    date = extract_leading_date(name)
    assert date is not None and date.precision is DatePrecision.YEAR_MONTH
    assert rule.build(name, date, None).subdir == "finance/zkb/2023"


def test_catalog_shape() -> None:
    assert [rule.name for rule in DEFAULT_RULES] == [
        "nzzs",
        "nzz",
        "zsz",
        "20min",
        "tagesanzeiger",
        "sonntagszeitung",
        "nzzEquity",
        "nzzFolio",
        "nzzGesellschaft",
        "acmCommunications",
        "computerworld",
        "glinput",
        "mmgl",
        "dated",
    ]
    assert set(OWNER_ALIASES.values()) == {"Toms", "Kornel", "Christof", "Christian", "Bruno"}
    minimums = {rule.keyword: rule.min_precision for rule in KEYWORD_RULES}
    assert minimums.pop("abstract_") is DatePrecision.YEAR
    assert set(minimums.values()) == {DatePrecision.YEAR_MONTH}
