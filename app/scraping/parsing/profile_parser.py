"""
BeautifulSoup-based field extraction for player profile pages.

Every field is located independently; a field that cannot be found or
parsed is returned as ``None`` and never fails the page.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from app.scraping.types import REPORT_MAX_LENGTH, ParsedProfile

NAME_FIELD = "lblPlayerName"
HEIGHT_FIELD = "lblHt"
WEIGHT_FIELD = "lblWt"
POSITIONS_FIELD = "lblPos"
BATS_THROWS_FIELD = "lblBT"
HOMETOWN_FIELD = "lblHomeTown"
TEAM_FIELD = "hlTournamentTeam"
REPORT_FIELD = "lblLatestReport"
REPORT_BLOCK_CLASSES = frozenset({"text-start", "p-1"})

HEIGHT_HYPHEN_REGEX = re.compile(r"(\d+)\s*-\s*(\d+)")
HEIGHT_FEET_INCHES_REGEX = re.compile(r"(\d+)\s*['′’]\s*(\d+)")
DIGITS_REGEX = re.compile(r"\d+")
GRADUATION_YEAR_PATTERNS = (
    re.compile(r"Class of[:\s]*(\d{4})(?!\d)", flags=re.IGNORECASE),
    re.compile(r"\bGrad[:\s]*(\d{4})(?!\d)", flags=re.IGNORECASE),
)
REPORT_LABEL_REGEX = re.compile(
    r"^\s*(?:Latest\s+)?(?:Showcase\s+)?Report\b[:\s]*(.+)",
    flags=re.IGNORECASE | re.DOTALL,
)
TAG_REGEX = re.compile(r"<[^>]*>")


class PlayerProfileParser:
    """
    Deterministic parser for one player profile document.
    """

    @classmethod
    def parse(cls, html: str) -> ParsedProfile:
        if not html or not html.strip():
            return ParsedProfile()
        try:
            soup = BeautifulSoup(html, "html.parser")
        except ParserRejectedMarkup:
            return ParsedProfile()
        return cls.parse_soup(soup)

    @classmethod
    def parse_soup(cls, soup: BeautifulSoup) -> ParsedProfile:
        bats, throws = cls.parse_bats_throws(cls._field_text(soup, "span", BATS_THROWS_FIELD))
        city, state = cls.parse_hometown(cls._field_text(soup, "span", HOMETOWN_FIELD))
        return ParsedProfile(
            name=cls._field_text(soup, "span", NAME_FIELD),
            height=cls.parse_height(cls._field_text(soup, "span", HEIGHT_FIELD)),
            weight=cls.parse_weight(cls._field_text(soup, "span", WEIGHT_FIELD)),
            graduation_year=cls.parse_graduation_year(soup.get_text(" ")),
            positions=cls._field_text(soup, "span", POSITIONS_FIELD),
            bats=bats,
            throws=throws,
            city=city,
            state=state,
            team_last_played=cls._field_text(soup, "a", TEAM_FIELD),
            report=cls.extract_report(soup),
        )

    @staticmethod
    def parse_height(text: str | None) -> int | None:
        """
        Convert "5-3" or 6' 2" style heights to total inches.
        """

        if not text:
            return None
        match = HEIGHT_HYPHEN_REGEX.search(text) or HEIGHT_FEET_INCHES_REGEX.search(text)
        if match is None:
            return None
        feet, inches = int(match.group(1)), int(match.group(2))
        return feet * 12 + inches

    @staticmethod
    def parse_weight(text: str | None) -> int | None:
        if not text:
            return None
        match = DIGITS_REGEX.search(text)
        return int(match.group(0)) if match else None

    @staticmethod
    def parse_graduation_year(text: str | None) -> str | None:
        if not text:
            return None
        for pattern in GRADUATION_YEAR_PATTERNS:
            match = pattern.search(text)
            if match is not None:
                return match.group(1)
        return None

    @staticmethod
    def parse_bats_throws(text: str | None) -> tuple[str | None, str | None]:
        if not text or "/" not in text:
            return None, None
        bats, throws = text.split("/", 1)
        return _clean_optional(bats), _clean_optional(throws)

    @staticmethod
    def parse_hometown(text: str | None) -> tuple[str | None, str | None]:
        if not text:
            return None, None
        city, comma, state = text.rpartition(",")
        if not comma:
            return _clean_optional(text), None
        return _clean_optional(city), _clean_optional(state)

    @classmethod
    def extract_report(cls, soup: BeautifulSoup) -> str | None:
        primary_node = cls._find_by_id(soup, "span", REPORT_FIELD)
        report = cls._clean_report(primary_node) if primary_node is not None else ""

        block = cls._find_report_block(soup)
        if block is not None:
            report = cls.combine_reports(report, cls._clean_report(block))

        if not report:
            report = cls._find_labeled_report(soup)

        return report[:REPORT_MAX_LENGTH] or None

    @staticmethod
    def combine_reports(primary: str, secondary: str) -> str:
        """
        Merge primary and secondary report text with the block precedence rules.
        """

        if len(secondary) > len(primary) and secondary != primary:
            return secondary
        if secondary and secondary not in primary:
            return f"{primary} {secondary}" if primary else secondary
        return primary

    @classmethod
    def _field_text(cls, soup: BeautifulSoup, tag_name: str, field_id: str) -> str | None:
        node = cls._find_by_id(soup, tag_name, field_id)
        if node is None:
            return None
        return _clean_optional(node.get_text(" ", strip=True))

    @staticmethod
    def _find_by_id(soup: BeautifulSoup, tag_name: str, field_id: str) -> Tag | None:
        matcher: Callable[[str | None], bool] = (
            lambda value: value is not None and field_id.lower() in value.lower()
        )
        found = soup.find(tag_name, id=matcher)
        return found if isinstance(found, Tag) else None

    @staticmethod
    def _find_report_block(soup: BeautifulSoup) -> Tag | None:
        for node in soup.find_all("div"):
            classes = set(node.get("class") or [])
            if REPORT_BLOCK_CLASSES <= classes:
                return node
        return None

    @staticmethod
    def _find_labeled_report(soup: BeautifulSoup) -> str:
        for node in soup.find_all(["div", "p"]):
            if not node.contents:
                continue
            first = node.contents[0]
            if not isinstance(first, NavigableString):
                continue
            match = REPORT_LABEL_REGEX.match(str(first))
            if match is not None:
                text = _clean_text(match.group(1))
                if text:
                    return text
        return ""

    @staticmethod
    def _clean_report(node: Tag) -> str:
        text = node.get_text(" ", strip=True)
        return _clean_text(TAG_REGEX.sub("", text))


def _clean_text(value: str) -> str:
    return re.sub(r"\s+", " ", value.replace("\xa0", " ")).strip()


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = _clean_text(value)
    return cleaned or None
