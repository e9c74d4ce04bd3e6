"""Metadata for NWS text and image products and other text products."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta, timezone

from goeskit.filename import AWIPS, remove_suffix

_NWS_PREFIX = "NWS"

# Number of leading lines searched for the WMO abbreviated heading
_HEADING_LINES = 5

# WMO abbreviated heading: T1T2A1A2ii CCCC YYGGgg[ BBB]
_WMO_HEADING = re.compile(
    r"(\w{2})(\w{2})(\w{2}) (\w{4}) (\d{2})(\d{4})( (\w{3}))?", re.ASCII
)

# AWIPS identifier: NNN followed by up to three xxx characters
_AWIPS_ID = re.compile(r"(\w{3})(\w{0,3})\s*", re.ASCII)

# Numeric fields read greedily, each up to its maximum width
_FULL_STAMP = re.compile(
    r"(\d{1,4}+)(\d{1,2}+)(\d{1,2}+)(\d{1,2}+)(\d{1,2}+)(\d{1,2}+)", re.ASCII
)
_YEAR_MONTH = re.compile(r"(\d{1,4}+)(\d{1,2}+)", re.ASCII)
_HOUR_MINUTE = re.compile(r"(\d{1,2}+)(\d{1,2}+)", re.ASCII)
_DAY_OF_YEAR = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_TEXT_STAMP = re.compile(
    r"(\d{1,2}+)(\d{1,3}+)_(\d{1,2}+)(\d{1,2}+)(\d{1,2}+)\.", re.ASCII
)


def _valid_clock(hour: int, minute: int, second: int = 0) -> bool:
    return hour <= 23 and minute <= 59 and second <= 61


def is_nws_annotation(annotation: str) -> bool:
    """True when a text product's annotation marks it as an NWS report."""
    return annotation.startswith(_NWS_PREFIX)


def parse_nws_text_time(annotation: str) -> datetime | None:
    """Return the UTC time leading a name like ``20180302011202-discussion.lrit``."""
    match = _FULL_STAMP.match(annotation)
    if match is None or match.end() != 14:
        return None
    year, month, day, hour, minute, second = map(int, match.groups())
    if year < 1 or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    if not _valid_clock(hour, minute, second):
        return None
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    return start + timedelta(
        days=day - 1, hours=hour, minutes=minute, seconds=second
    )


def _next_line(lines: Iterator[str]) -> str:
    return next(lines, "").removesuffix("\n")


def extract_text_awips(lines: Iterable[str]) -> AWIPS | None:
    """Find the WMO heading in the first lines and the AWIPS identifier after it.

    Returns None when no heading is found or the line after it is not a
    valid AWIPS identifier.
    """
    it = iter(lines)
    for _ in range(_HEADING_LINES):
        heading = _WMO_HEADING.fullmatch(_next_line(it))
        if heading is None:
            continue
        ident = _AWIPS_ID.fullmatch(_next_line(it))
        if ident is None:
            return None
        return AWIPS(
            t1t2=heading[1],
            a1a2=heading[2],
            ii=heading[3],
            cccc=heading[4],
            yy=heading[5],
            gggg=heading[6],
            bbb=heading[8] or "",
            nnn=ident[1],
            xxx=ident[2],
        )
    return None


def parse_irregular_time(annotation: str) -> datetime | None:
    """Return the UTC time at the start of an NWS image file name, or None.

    Names look like ``201803640503019-USA_latest.gif``: year and month are
    followed by a day of the year of two or three digits, then hour and
    minute. The month is used only to tell how many digits the day of the
    year has.
    """
    head = _YEAR_MONTH.match(annotation)
    if head is None or head.end() != 6:
        return None
    year, month = int(head[1]), int(head[2])
    if year < 1 or not 1 <= month <= 12:
        return None

    rest = annotation[6:]
    # April holds days of year with both 2 and 3 digits; a leading 1 means 3
    width = 3 if (month == 4 and rest.startswith("1")) or month > 4 else 2
    day = _DAY_OF_YEAR.match(rest[:width])
    if day is None:
        return None
    yday = int(day[1])
    if yday >= 367:
        return None

    clock = _HOUR_MINUTE.match(rest[width:])
    if clock is None or clock.end() != 4:
        return None
    hour, minute = int(clock[1]), int(clock[2])
    if not _valid_clock(hour, minute):
        return None

    try:
        start = datetime(year, 1, 1, hour, minute, tzinfo=timezone.utc)
        return start + timedelta(days=yday - 1)
    except OverflowError:
        return None


def nws_image_basename(annotation: str) -> str:
    """Return the annotation without extension and without any ``dat...`` suffix."""
    name = remove_suffix(annotation)
    head, sep, _ = name.partition("dat")
    return head if sep else name


def parse_text_time(annotation: str) -> datetime | None:
    """Return the UTC time in a name like ``16-TEXTdat_17348_201455.lrit``.

    After the first ``_`` come a two digit year, the day of the year, ``_``,
    hour, minute and second, followed by a dot.
    """
    _, sep, tail = annotation.partition("_")
    if not sep or not tail:
        return None
    match = _TEXT_STAMP.match(tail)
    if match is None:
        return None
    yy, yday, hour, minute, second = map(int, match.groups())
    if not 1 <= yday <= 366 or not _valid_clock(hour, minute, second):
        return None
    year = 2000 + yy if yy < 69 else 1900 + yy
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(
        days=yday - 1, hours=hour, minutes=minute, seconds=second
    )