"""Product descriptors and output filename construction."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# strftime output that does not fit this many bytes is dropped
_TIME_BUFFER = 128


@dataclass
class AWIPS:
    """AWIPS product identifier and WMO abbreviated heading fields."""

    t1t2: str = ""
    a1a2: str = ""
    ii: str = ""
    cccc: str = ""
    yy: str = ""
    gggg: str = ""
    bbb: str = ""
    nnn: str = ""
    xxx: str = ""
    qq: str = ""


@dataclass
class Region:
    """Image region, such as FD / Full Disk."""

    name_short: str = ""
    name_long: str = ""


@dataclass
class Channel:
    """Image channel, such as IR / Infrared."""

    name_short: str = ""
    name_long: str = ""


def remove_suffix(name: str) -> str:
    """Strip everything from the last dot onwards."""
    head, dot, _ = name.rpartition(".")
    return head if dot else name


def _substitute(text: str, keyword: str, lookup: Callable[[str], str]) -> str:
    """Replace every ``{keyword:key}`` or ``{keyword:key|modifier}``."""
    prefix = "{" + keyword + ":"
    pos = text.find(prefix)
    while pos != -1:
        start = pos + len(prefix)
        end = text.find("}", start)
        if end == -1:
            raise ValueError("Invalid pattern")
        key, bar, modifier = text[start:end].partition("|")
        value = lookup(key)
        if bar:
            if modifier == "upper":
                value = value.upper()
            elif modifier == "lower":
                value = value.lower()
        text = text[:pos] + value + text[end + 1:]
        pos = text.find(prefix, pos + len(value))
    return text


def _utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _format_time(moment: datetime, fmt: str) -> str:
    result = _utc(moment).strftime(fmt)
    if len(result.encode()) >= _TIME_BUFFER:
        return ""
    return result


def _names(short: str, long: str) -> Callable[[str], str]:
    return {"short": short, "long": long}.get


@dataclass
class FilenameBuilder:
    """Expands filename patterns using product metadata."""

    dir: str = ""
    filename: str = ""
    time: datetime = EPOCH
    awips: AWIPS = field(default_factory=AWIPS)
    region: Region = field(default_factory=Region)
    channel: Channel = field(default_factory=Channel)

    def build(self, pattern: str = "", extension: str = "") -> str:
        """Return the output path for ``pattern`` with all fields substituted."""
        out = pattern or "{filename}"
        out = f"{self.dir}/{out}" if self.dir else f"./{out}"
        if extension:
            out = f"{out}.{extension}"

        out = out.replace("%t", _format_time(self.time, "%Y%m%d-%H%M%S"))
        out = out.replace("{filename}", self.filename)
        out = _substitute(out, "time", lambda fmt: _format_time(self.time, fmt))

        awips = asdict(self.awips)
        out = _substitute(out, "awips", lambda key: awips.get(key, ""))

        region = _names(self.region.name_short, self.region.name_long)
        out = _substitute(out, "region", lambda key: region(key, ""))

        channel = _names(self.channel.name_short, self.channel.name_long)
        out = _substitute(out, "channel", lambda key: channel(key, ""))
        return out