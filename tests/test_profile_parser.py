"""
tests/test_profile_parser.py

Field extraction rules for player profile pages. Pure parsing, no I/O.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from app.scraping.parsing import PlayerProfileParser
from app.scraping.types import REPORT_MAX_LENGTH, ParsedProfile


class TestHeight:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("6' 2\"", 74),
            ("6'2\"", 74),
            ("6′ 2″", 74),
            ("5-3", 63),
            ("5 - 11", 71),
            ("6-0 tall", 72),
        ],
    )
    def test_recognized_formats(self, text: str, expected: int) -> None:
        assert PlayerProfileParser.parse_height(text) == expected

    @pytest.mark.parametrize("text", ["", None, "tall", "74", "n/a"])
    def test_unrecognized_is_none(self, text: str | None) -> None:
        assert PlayerProfileParser.parse_height(text) is None

    def test_first_match_wins(self) -> None:
        assert PlayerProfileParser.parse_height("5-10 (was 5-8)") == 70


class TestWeight:
    def test_first_digit_run(self) -> None:
        assert PlayerProfileParser.parse_weight("185 lbs") == 185

    def test_no_digits(self) -> None:
        assert PlayerProfileParser.parse_weight("unknown") is None


class TestGraduationYear:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Class of 2026", "2026"),
            ("class of: 2027", "2027"),
            ("Grad 2025 | HS", "2025"),
            ("Class of 2024 ... Grad 2025", "2024"),
        ],
    )
    def test_patterns(self, text: str, expected: str) -> None:
        assert PlayerProfileParser.parse_graduation_year(text) == expected

    def test_requires_exactly_four_digits(self) -> None:
        assert PlayerProfileParser.parse_graduation_year("Class of 20261") is None

    def test_missing(self) -> None:
        assert PlayerProfileParser.parse_graduation_year("no year here") is None


class TestBatsThrows:
    def test_split_on_first_slash(self) -> None:
        assert PlayerProfileParser.parse_bats_throws("L/R") == ("L", "R")
        assert PlayerProfileParser.parse_bats_throws(" S / R/x ") == ("S", "R/x")

    def test_no_slash_means_both_empty(self) -> None:
        assert PlayerProfileParser.parse_bats_throws("Right") == (None, None)


class TestHometown:
    def test_city_and_state(self) -> None:
        assert PlayerProfileParser.parse_hometown("Austin, TX") == ("Austin", "TX")

    def test_no_comma_is_city_only(self) -> None:
        assert PlayerProfileParser.parse_hometown("Austin") == ("Austin", None)

    def test_splits_on_last_comma(self) -> None:
        assert PlayerProfileParser.parse_hometown("St. Louis, Park, MN") == (
            "St. Louis, Park",
            "MN",
        )


class TestReport:
    def test_strips_markup_and_decodes_entities(self) -> None:
        html = (
            '<span id="x_lblLatestReport">Strong &amp; quick&nbsp;bat, '
            "&quot;elite&quot; <i>arm</i> &lt;90 mph&gt;</span>"
        )
        parsed = PlayerProfileParser.parse(html)
        assert parsed.report == 'Strong & quick bat, "elite" arm'

    def test_longer_secondary_block_replaces_primary(self) -> None:
        html = (
            '<span id="x_lblLatestReport">Short note.</span>'
            '<div class="text-start p-1">Short note. Much longer detailed evaluation.</div>'
        )
        parsed = PlayerProfileParser.parse(html)
        assert parsed.report == "Short note. Much longer detailed evaluation."

    def test_shorter_distinct_secondary_block_is_appended(self) -> None:
        html = (
            '<span id="x_lblLatestReport">Detailed primary evaluation text.</span>'
            '<div class="text-start p-1">Extra.</div>'
        )
        parsed = PlayerProfileParser.parse(html)
        assert parsed.report == "Detailed primary evaluation text. Extra."

    def test_contained_secondary_block_is_ignored(self) -> None:
        assert PlayerProfileParser.combine_reports("Good arm. Fast.", "Fast.") == "Good arm. Fast."

    def test_labeled_fallback_when_no_report_elements(self) -> None:
        html = "<div>Latest Showcase Report: Projectable frame.</div>"
        assert PlayerProfileParser.parse(html).report == "Projectable frame."

    def test_truncated_to_limit(self, profile_html: Callable[..., str]) -> None:
        parsed = PlayerProfileParser.parse(profile_html(report="x" * 3000))
        assert parsed.report is not None
        assert len(parsed.report) == REPORT_MAX_LENGTH


class TestFullPage:
    def test_extracts_every_field(self, profile_html: Callable[..., str]) -> None:
        parsed = PlayerProfileParser.parse(profile_html())

        assert parsed == ParsedProfile(
            name="Jordan Smith",
            height=74,
            weight=185,
            graduation_year="2026",
            positions="SS, RHP",
            bats="R",
            throws="R",
            city="Austin",
            state="TX",
            team_last_played="Texas Elite 17U",
            report="Quick hands, plus arm strength.",
        )
        assert parsed.has_data()

    def test_fields_are_independent(self, profile_html: Callable[..., str]) -> None:
        parsed = PlayerProfileParser.parse(
            profile_html(name=None, height="unknown", hometown="Austin", report=None)
        )

        assert parsed.name is None
        assert parsed.height is None
        assert parsed.city == "Austin"
        assert parsed.state is None
        assert parsed.weight == 185

    def test_whitespace_is_trimmed(self) -> None:
        parsed = PlayerProfileParser.parse('<span id="a_lblPlayerName">\n   Sam   Lee \t</span>')
        assert parsed.name == "Sam Lee"

    @pytest.mark.parametrize(
        "html",
        ["", "   ", "<html><body><p>Nothing</p></body></html>", "<span id=", "<<<>>>"],
    )
    def test_empty_or_broken_markup_never_raises(self, html: str) -> None:
        parsed = PlayerProfileParser.parse(html)
        assert not parsed.has_data()
