from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

import dateparser

from ..config import today as current_date
from ..models import Priority
from ..schemas import DEFAULT_ASSIGNEE, DEFAULT_NAME, DEFAULT_PRIORITY, DEFAULT_TIME, ParsedTask

logger = logging.getLogger(__name__)

PRIORITY_PAT = re.compile(r"\b(p[1-4])\b", re.IGNORECASE)

# Tried in order; the first fragment that is a real clock time wins
TIME_PATS = [
    re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}:\d{2}\b"),
    re.compile(r"\b\d{1,2}\s*(?:am|pm)\b", re.IGNORECASE),
]
CLOCK_PAT = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$", re.IGNORECASE)
EVENING_HOURS = range(6, 12)

TOMORROW_PAT = re.compile(r"\btomorrow\b", re.IGNORECASE)
TODAY_PAT = re.compile(r"\btoday\b", re.IGNORECASE)

MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
DAY_MONTH_PAT = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+({MONTHS})\b(?:\s+(\d{{4}})\b)?",
    re.IGNORECASE,
)
SLASH_DATE_PAT = re.compile(r"(?<![\d/])(\d{1,2})/(\d{1,2})(?:/(\d{4}))?(?![\d/])")
DASH_DATE_PAT = re.compile(r"(?<![\d-])(\d{1,2})-(\d{1,2})(?:-(\d{4}))?(?![\d-])")
ISO_DATE_PAT = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")

NAME_RUN = r"[A-Z][A-Za-z]*(?:\s+[A-Z][A-Za-z]*)*\b"
ASSIGNEE_PATS = [
    # "... by Sarah", "... for John Smith"
    re.compile(rf"\b(?i:by|to|for)\s+({NAME_RUN})"),
    # "... Aman by"; needs a word before it, so never the first word of the text
    re.compile(rf"(?<=\S)\s+({NAME_RUN})\s+(?i:by|at|on)\b"),
]

FILLER_PAT = re.compile(r"\b(?:by|to|for|at|on)\b", re.IGNORECASE)
ASSIGNEE_KEYWORD_PAT = re.compile(r"\b(?:by|to|for)\b", re.IGNORECASE)


@dataclass(frozen=True)
class ParseState:
    """Working remainder plus whatever the stages have extracted so far."""

    original: str
    today: date
    remaining: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def take(self, match: re.Match | None, **found: Any) -> ParseState:
        remaining = self.remaining
        if match is not None:
            remaining = remaining[: match.start()] + remaining[match.end() :]
        return ParseState(self.original, self.today, remaining, {**self.fields, **found})


def _first_match(candidates, text: str, *args):
    """
    Walk (pattern, convert) pairs in order and return (match, value) for the
    first match whose converted value is not None.
    """
    for pattern, convert in candidates:
        for m in pattern.finditer(text):
            value = convert(m, *args)
            if value is not None:
                return m, value
    return None, None


def _clock(text: str) -> tuple[int, int, str | None] | None:
    m = CLOCK_PAT.match(text.strip())
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2) or 0)
    meridiem = m.group(3).upper() if m.group(3) else None
    if minute > 59:
        return None
    if meridiem is not None and not 1 <= hour <= 12:
        return None
    if hour > 23:
        return None
    return hour, minute, meridiem


def _time_text(m: re.Match) -> str | None:
    raw = m.group(0)
    return raw if _clock(raw) else None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        logger.debug("Discarding invalid date %s-%s-%s", year, month, day)
        return None


def _day_month_date(m: re.Match, today: date) -> date | None:
    year = m.group(3) or today.year
    dt = dateparser.parse(
        f"{int(m.group(1))} {m.group(2)} {year}",
        languages=["en"],
        settings={"DATE_ORDER": "DMY", "STRICT_PARSING": True},
    )
    return dt.date() if dt else None


def _numeric_date(m: re.Match, today: date) -> date | None:
    day, month, year = m.groups()
    return _safe_date(int(year or today.year), int(month), int(day))


def _iso_date(m: re.Match, today: date) -> date | None:
    year, month, day = m.groups()
    return _safe_date(int(year), int(month), int(day))


DATE_PATTERNS: list[tuple[re.Pattern, Callable[[re.Match, date], date | None]]] = [
    (DAY_MONTH_PAT, _day_month_date),
    (SLASH_DATE_PAT, _numeric_date),
    (DASH_DATE_PAT, _numeric_date),
    (ISO_DATE_PAT, _iso_date),
]
TIME_PATTERNS = [(pat, _time_text) for pat in TIME_PATS]
ASSIGNEE_PATTERNS = [(pat, lambda m: m.group(1)) for pat in ASSIGNEE_PATS]


def extract_priority(state: ParseState) -> ParseState:
    # searched on the untouched input, stripped everywhere from the remainder
    m = PRIORITY_PAT.search(state.original)
    priority = Priority(m.group(1).upper()) if m else DEFAULT_PRIORITY
    remaining = PRIORITY_PAT.sub("", state.remaining)
    return ParseState(state.original, state.today, remaining, {**state.fields, "priority": priority})


def extract_time(state: ParseState) -> ParseState:
    m, raw = _first_match(TIME_PATTERNS, state.remaining)
    if m is None:
        return state
    return state.take(m, due_time=raw)


def extract_date(state: ParseState) -> ParseState:
    m = TOMORROW_PAT.search(state.remaining)
    if m:
        return state.take(m, due_date=state.today + timedelta(days=1))
    m = TODAY_PAT.search(state.remaining)
    if m:
        return state.take(m, due_date=state.today)
    m, due = _first_match(DATE_PATTERNS, state.remaining, state.today)
    if m is None:
        return state
    return state.take(m, due_date=due)


def extract_assignee(state: ParseState) -> ParseState:
    m, assignee = _first_match(ASSIGNEE_PATTERNS, state.remaining)
    if m is None:
        return state
    return state.take(m, assignee=assignee)


def derive_name(text: str) -> str:
    """Drop leftover filler keywords and squash whitespace."""
    return " ".join(FILLER_PAT.sub("", text).split()).strip(" ,;")


def extract_name(state: ParseState) -> ParseState:
    name = derive_name(state.remaining)
    if not name:
        head = ASSIGNEE_KEYWORD_PAT.split(state.original, maxsplit=1)[0]
        name = " ".join(PRIORITY_PAT.sub("", head).split())
    return ParseState(state.original, state.today, "", {**state.fields, "name": name})


STAGES = [extract_priority, extract_time, extract_date, extract_assignee, extract_name]


def normalize_time(raw: str) -> str:
    """
    Render a captured clock fragment as 'H:MM AM|PM'.
    Without a meridiem, 6..11 is read as evening (PM); 0..5 as AM and
    12..23 as PM on a 12-hour clock.
    """
    clock = _clock(raw)
    if clock is None:
        return DEFAULT_TIME
    hour, minute, meridiem = clock
    if meridiem is None:
        meridiem = "PM" if hour in EVENING_HOURS or hour >= 12 else "AM"
        hour = hour % 12 or 12
    return f"{hour}:{minute:02d} {meridiem}"


def parse_task(text: str, today: date | None = None) -> ParsedTask:
    """
    Natural-language task parser:
    - priority P1..P4 anywhere in the text (default P3)
    - time like '5pm', '5:30 pm', '17:00' (default 9:00 AM)
    - date 'today', 'tomorrow', '20th June', '20/6', '20-6-2026', '2026-06-20' (default today)
    - assignee 'by/to/for Name', or 'Name by/at/on'
    - whatever is left becomes the name
    Never raises; missing pieces fall back to defaults.
    """
    # lone surrogates cannot be validated as str downstream
    original = (text or "").encode("utf-8", "replace").decode("utf-8")
    state = ParseState(original=original, today=today or current_date(), remaining=original)
    logger.debug("Parsing input: %r", original)

    for stage in STAGES:
        state = stage(state)

    fields = state.fields
    raw_time = fields.get("due_time")
    parsed = ParsedTask(
        name=fields.get("name") or DEFAULT_NAME,
        assignee=fields.get("assignee") or DEFAULT_ASSIGNEE,
        due_date=fields.get("due_date") or state.today,
        due_time=normalize_time(raw_time) if raw_time else DEFAULT_TIME,
        priority=fields["priority"],
    )
    logger.debug("Parsed result: %s", parsed.model_dump())
    return parsed
