from datetime import datetime, timezone

import pytest

from goeskit.filename import AWIPS, Channel, FilenameBuilder, Region, remove_suffix


def test_remove_suffix_strips_last_extension():
    assert remove_suffix("a.b.lrit") == "a.b"


def test_remove_suffix_without_dot():
    assert remove_suffix("plain") == "plain"


def test_default_pattern_is_filename_in_current_dir():
    assert FilenameBuilder(filename="abc").build("") == "./abc"


def test_dir_and_extension():
    fb = FilenameBuilder(dir="out", filename="abc")
    assert fb.build("{filename}", "png") == "out/abc.png"


def test_time_pattern():
    fb = FilenameBuilder(time=datetime(2018, 3, 2, 1, 12, 2, tzinfo=timezone.utc))
    assert fb.build("{time:%Y%m%d}") == "./20180302"


def test_iso_shortcut():
    fb = FilenameBuilder(time=datetime(2018, 3, 2, 1, 12, 2, tzinfo=timezone.utc))
    assert fb.build("%t") == "./20180302-011202"


def test_awips_with_modifiers():
    fb = FilenameBuilder(awips=AWIPS(nnn="afd", xxx="OKX"))
    assert fb.build("{awips:nnn|upper}{awips:xxx|lower}") == "./AFDokx"


def test_unknown_key_is_empty():
    fb = FilenameBuilder(awips=AWIPS(nnn="AFD"))
    assert fb.build("x{awips:zzz}y") == "./xy"


def test_region_and_channel():
    fb = FilenameBuilder(
        region=Region("FD", "Full Disk"),
        channel=Channel("CH02", "Channel 2"),
    )
    assert fb.build("{region:short}/{channel:short}_{channel:long|lower}") == (
        "./FD/CH02_channel 2"
    )


def test_unterminated_pattern_raises():
    with pytest.raises(ValueError):
        FilenameBuilder().build("{time:%Y")


def test_repeated_fields_all_replaced():
    fb = FilenameBuilder(filename="abc")
    result = fb.build("{filename}-{filename}")
    assert result.count("abc") == 2
    assert "{" not in result