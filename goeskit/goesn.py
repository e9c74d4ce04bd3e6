"""Metadata for GOES-N series (GOES-13 and GOES-15) images."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from goeskit.filename import Channel, Region

_REGIONS = {
    1: Region("FD", "Full Disk"),
    2: Region("NH", "Northern Hemisphere"),
    3: Region("SH", "Southern Hemisphere"),
    4: Region("US", "United States"),
}

# Year, day of year and time, e.g. 2018/079/00:00:18
_FRAME_TIME = re.compile(
    r"(\d{1,4}+)/(\d{1,3}+)/(\d{1,2}+):(\d{1,2}+):(\d{1,2}+)", re.ASCII
)


@dataclass
class GOESNDetails:
    """The subset of ancillary text fields used for GOES-N images."""

    frame_start: datetime | None = None
    satellite: str = ""


def region_from_sub_id(product_sub_id: int) -> Region:
    """Return the region encoded in the last digit of the product sub ID."""
    digit = product_sub_id % 10
    known = _REGIONS.get(digit)
    if known is not None:
        return Region(known.name_short, known.name_long)
    num = digit - 5
    return Region(f"SI{num:02d}", f"Special Interest {num}")


def channel_from_sub_id(product_sub_id: int) -> Channel:
    """Return the channel encoded in the range of the product sub ID."""
    if product_sub_id <= 10:
        return Channel("IR", "Infrared")
    if product_sub_id <= 20:
        return Channel("VS", "Visible")
    return Channel("WV", "Water Vapor")


def parse_goesn_time(text: str) -> datetime | None:
    """Parse a ``year/day-of-year/HH:MM:SS`` time stamp as UTC, or return None."""
    match = _FRAME_TIME.fullmatch(text)
    if match is None:
        return None
    year, yday, hour, minute, second = map(int, match.groups())
    if year < 1 or not 1 <= yday <= 366:
        return None
    if hour > 23 or minute > 59 or second > 61:
        return None
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(
        days=yday - 1, hours=hour, minutes=minute, seconds=second
    )


def parse_goesn_details(text: str) -> GOESNDetails:
    """Parse ``key = value`` pairs separated by ``;`` from the ancillary text.

    Raises ValueError for a malformed pair or an unparsable frame start time.
    """
    details = GOESNDetails()
    for pair in text.split(";"):
        if not pair:
            continue
        elements = pair.split("=")
        if len(elements) != 2:
            raise ValueError(f"Expected key=value pair, got: {pair!r}")
        key = elements[0].rstrip()
        value = elements[1].lstrip()
        if key == "Time of frame start":
            moment = parse_goesn_time(value)
            if moment is None:
                raise ValueError(f"Invalid time of frame start: {value!r}")
            details.frame_start = moment
        elif key == "Satellite":
            details.satellite = value
    return details