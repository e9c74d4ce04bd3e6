import os

import pytest

from goeskit.options import (
    STDIN_PATH,
    Options,
    OptionsError,
    ProcessMode,
    parse_options,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "goesproc.conf"
    path.write_text('[[handler]]\ntype = "image"\n')
    return str(path)


def test_missing_config():
    with pytest.raises(OptionsError, match="no configuration file specified"):
        parse_options(["--mode", "lrit"])


def test_config_is_directory(tmp_path):
    with pytest.raises(OptionsError, match="Not a file"):
        parse_options(["-c", str(tmp_path), "-m", "lrit"])


def test_config_does_not_exist(tmp_path):
    with pytest.raises(OptionsError, match="invalid configuration file"):
        parse_options(["-c", str(tmp_path / "nope.conf"), "-m", "lrit"])


def test_no_mode(config_file):
    with pytest.raises(OptionsError, match="no mode specified"):
        parse_options(["-c", config_file])


def test_invalid_mode(config_file):
    with pytest.raises(OptionsError, match="invalid argument 'video'"):
        parse_options(["-c", config_file, "-m", "video"])


def test_invalid_option(config_file):
    with pytest.raises(OptionsError, match="Invalid option"):
        parse_options(["-c", config_file, "--bogus"])


def test_subscribe_implies_packet(config_file):
    opts = parse_options(["-c", config_file, "--subscribe", "tcp://localhost:5004"])
    assert opts.mode is ProcessMode.PACKET
    assert opts.subscribe == "tcp://localhost:5004"
    assert opts.paths == [STDIN_PATH]


def test_subscribe_conflicts_with_lrit(config_file):
    with pytest.raises(OptionsError, match="implies '--mode packet'"):
        parse_options(["-c", config_file, "--subscribe", "tcp://localhost:5004", "-m", "lrit"])


def test_lrit_mode_keeps_paths(config_file, tmp_path):
    opts = parse_options(
        ["--config", config_file, "a.lrit", "--mode", "lrit", "-f", "--out", "out", str(tmp_path)]
    )
    assert opts == Options(
        config=config_file,
        mode=ProcessMode.LRIT,
        force=True,
        out="out",
        paths=["a.lrit", str(tmp_path)],
    )


def test_defaults(config_file):
    opts = parse_options(["-c", config_file, "-m", "lrit"])
    assert opts.force is False
    assert opts.out == "."
    assert opts.subscribe == ""
    assert opts.paths == []


def test_packet_mode_defaults_to_stdin(config_file):
    opts = parse_options(["-c", config_file, "-m", "packet"])
    assert opts.paths == [STDIN_PATH]


def test_packet_mode_expands_directories(config_file, tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    for name in ("b.raw", "a.raw", "c.txt"):
        (data / name).write_bytes(b"")
    single = tmp_path / "single.bin"
    single.write_bytes(b"")
    opts = parse_options(["-c", config_file, "-m", "packet", str(single), str(data)])
    assert opts.paths == [
        str(single),
        os.path.join(str(data), "a.raw"),
        os.path.join(str(data), "b.raw"),
    ]


def test_packet_mode_missing_path(config_file, tmp_path):
    with pytest.raises(OptionsError, match="stat"):
        parse_options(["-c", config_file, "-m", "packet", str(tmp_path / "gone")])


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as info:
        parse_options(["--help"])
    assert info.value.code == 0
    assert "Usage:" in capsys.readouterr().err