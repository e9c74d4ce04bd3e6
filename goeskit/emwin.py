"""Metadata extracted from EMWIN product file names."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from goeskit.filename import AWIPS

# WMO abbreviated heading: T1T2 A1A2 ii CCCC YY GGgg [BBB]
_WMO_HEADING = re.compile(
    r"(\w{2})(\w{2})(\w{2})(\w{4})(\d{2})(\d{4})(\w{3})?", re.ASCII
)

# AWIPS identifier: sequence number, priority, NNN, xxx, qq
_AWIPS_ID = re.compile(r"(\d{6})-(\d{1})-(\w{3})(\w{3})(\w{2})", re.ASCII)


def parse_emwin_time(annotation: str) -> datetime | None:
    """Return the UTC time in the fifth ``_``-separated field, or None."""
    parts = annotation.split("_")
    if len(parts) < 5:
        return None
    stamp = parts[4][:14]
    if len(stamp) != 14 or not stamp.isdigit():
        return None
    try:
        moment = datetime.strptime(stamp, "%Y%m%d%H%M%S")
    except ValueError:
        return None
    return moment.replace(tzinfo=timezone.utc)


def parse_emwin_awips(annotation: str) -> AWIPS | None:
    """Return the WMO heading and AWIPS identifier fields, or None.

    The optional BBB part of the heading is matched but not reported.
    """
    parts = annotation.split("_")
    if len(parts) < 6:
        return None
    heading = _WMO_HEADING.fullmatch(parts[1])
    if heading is None:
        return None
    ident = _AWIPS_ID.match(parts[5])
    if ident is None:
        return None
    return AWIPS(
        t1t2=heading[1],
        a1a2=heading[2],
        ii=heading[3],
        cccc=heading[4],
        yy=heading[5],
        gggg=heading[6],
        bbb="",
        nnn=ident[3],
        xxx=ident[4],
        qq=ident[5],
    )