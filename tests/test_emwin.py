from datetime import datetime, timezone

from goeskit.emwin import parse_emwin_awips, parse_emwin_time

NAME = "A_FXUS63KDMX021200_C_KWIN_20180302120004_549178-2-AFDDMXIA.TXT"


def test_time_from_fifth_field():
    assert parse_emwin_time(NAME) == datetime(2018, 3, 2, 12, 0, 4, tzinfo=timezone.utc)


def test_time_needs_five_fields():
    assert parse_emwin_time("A_FXUS63KDMX021200_C_KWIN") is None


def test_time_rejects_invalid_date():
    assert parse_emwin_time("A_B_C_D_20181302120004_X") is None


def test_time_rejects_short_stamp():
    assert parse_emwin_time("A_B_C_D_201803021200_X") is None


def test_awips_fields():
    awips = parse_emwin_awips(NAME)
    assert awips is not None
    assert (awips.t1t2, awips.a1a2, awips.ii, awips.cccc) == ("FX", "US", "63", "KDMX")
    assert (awips.yy, awips.gggg) == ("02", "1200")
    assert (awips.nnn, awips.xxx, awips.qq) == ("AFD", "DMX", "IA")
    assert awips.bbb == ""


def test_awips_heading_with_bbb_matches():
    name = NAME.replace("FXUS63KDMX021200", "FXUS63KDMX021200RRA")
    awips = parse_emwin_awips(name)
    assert awips is not None
    assert awips.cccc == "KDMX"


def test_awips_heading_must_match_whole_field():
    name = NAME.replace("FXUS63KDMX021200", "FXUS63KDMX021200XY")
    assert parse_emwin_awips(name) is None


def test_awips_needs_six_fields():
    assert parse_emwin_awips("A_FXUS63KDMX021200_C_KWIN_20180302120004") is None


def test_awips_identifier_must_match():
    name = NAME.replace("549178-2-", "549178-")
    assert parse_emwin_awips(name) is None