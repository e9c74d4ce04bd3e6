from datetime import datetime, timedelta, timezone

import pytest

from goeskit.filename import AWIPS
from goeskit.nws import (
    extract_text_awips,
    is_nws_annotation,
    nws_image_basename,
    parse_irregular_time,
    parse_nws_text_time,
    parse_text_time,
)

UTC = timezone.utc


@pytest.mark.parametrize(
    "annotation, expected",
    [
        ("NWS_something.lrit", True),
        ("NWSFOO", True),
        ("TEXT_something.lrit", False),
        ("nws_lower.lrit", False),
        ("", False),
    ],
)
def test_is_nws_annotation(annotation, expected):
    assert is_nws_annotation(annotation) is expected


def test_parse_nws_text_time_example():
    got = parse_nws_text_time("20180302011202-discussion.lrit")
    assert got == datetime(2018, 3, 2, 1, 12, 2, tzinfo=UTC)


@pytest.mark.parametrize(
    "annotation",
    [
        "discussion.lrit",
        "2018030201120-discussion.lrit",
        "20181302011202-discussion.lrit",
        "20180302251202-discussion.lrit",
        "",
    ],
)
def test_parse_nws_text_time_rejects(annotation):
    assert parse_nws_text_time(annotation) is None


def test_extract_text_awips_without_bbb():
    lines = ["000 ", "FXUS61 KBOX 020112", "AFDBOX", "", "Area forecast discussion"]
    assert extract_text_awips(lines) == AWIPS(
        t1t2="FX",
        a1a2="US",
        ii="61",
        cccc="KBOX",
        yy="02",
        gggg="0112",
        bbb="",
        nnn="AFD",
        xxx="BOX",
    )


def test_extract_text_awips_with_bbb_and_newlines():
    lines = ["FXUS61 KBOX 020112 AAA\n", "AFDBOX\n", "text\n"]
    awips = extract_text_awips(lines)
    assert awips.bbb == "AAA"
    assert awips.nnn == "AFD"
    assert awips.qq == ""


def test_extract_text_awips_short_identifier_with_spaces():
    awips = extract_text_awips(["WWUS81 KBOX 020112", "SPS   "])
    assert awips.nnn == "SPS"
    assert awips.xxx == ""


def test_extract_text_awips_bad_identifier():
    assert extract_text_awips(["FXUS61 KBOX 020112", "A-B"]) is None


def test_extract_text_awips_heading_too_late():
    lines = ["a", "b", "c", "d", "e", "FXUS61 KBOX 020112", "AFDBOX"]
    assert extract_text_awips(lines) is None


def test_extract_text_awips_empty():
    assert extract_text_awips([]) is None


def test_parse_irregular_time_two_digit_day():
    got = parse_irregular_time("201801010001834-pacsfc48_latestBW.gif")
    assert got == datetime(2018, 1, 1, 0, 1, tzinfo=UTC)


def test_parse_irregular_time_day_of_year():
    got = parse_irregular_time("201803640503019-USA_latest.gif")
    assert got == datetime(2018, 1, 1, 5, 3, tzinfo=UTC) + timedelta(days=63)


def test_parse_irregular_time_april_three_digits():
    got = parse_irregular_time("2018041050104193-pac24_latestBW.gif")
    assert got == datetime(2018, 1, 1, 1, 4, tzinfo=UTC) + timedelta(days=104)


@pytest.mark.parametrize(
    "annotation",
    ["latest.gif", "201813010001834-x.gif", "20180101", "2018010199990-x.gif"],
)
def test_parse_irregular_time_rejects(annotation):
    assert parse_irregular_time(annotation) is None


def test_nws_image_basename_strips_extension():
    got = nws_image_basename("201801010001834-pacsfc48_latestBW.gif")
    assert got == "201801010001834-pacsfc48_latestBW"


def test_nws_image_basename_strips_dat_suffix():
    assert nws_image_basename("pacsfc48dat327221257926.gif") == "pacsfc48"


def test_parse_text_time_example():
    got = parse_text_time("16-TEXTdat_17348_201455.lrit")
    assert got == datetime(2017, 1, 1, 20, 14, 55, tzinfo=UTC) + timedelta(days=347)


@pytest.mark.parametrize(
    "annotation",
    [
        "16-TEXTdat.lrit",
        "16-TEXTdat_",
        "16-TEXTdat_17348_201455",
        "16-TEXTdat_17348-201455.lrit",
        "16-TEXTdat_17000_201455.lrit",
    ],
)
def test_parse_text_time_rejects(annotation):
    assert parse_text_time(annotation) is None