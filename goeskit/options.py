"""Command line options for the product processor."""

from __future__ import annotations

import enum
import fnmatch
import getopt
import os
import stat
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version

PROGRAM = "goesproc"
STDIN_PATH = "/proc/self/fd/0"

USAGE = f"""\
Usage: {PROGRAM} [OPTIONS] [path...]
Process stream of packets (VCDUs) or list of LRIT files.

Options:
  -c, --config PATH          Path to configuration file
  -m, --mode [packet|lrit]   Process stream of VCDU packets
                             or pre-assembled LRIT files
      --subscribe ADDR       Address of nanomsg publisher
                             (implies --mode packet)
  -f  --force                Overwrite existing output files
      --out DIR              Output directory

Other:
      --help     Display this help and exit
      --version  Print version information and exit

If mode is set to packet, {PROGRAM} reads VCDU packets from the
specified path(s). To process real time data you can either setup a pipe
from the decoder into {PROGRAM} (e.g. use /dev/stdin as path argument),
or use --subscribe to consume packets directly from the receiver.
To process recorded data you can specify a list of files that contain
VCDU packets in chronological order.

If mode is set to lrit, {PROGRAM} finds all LRIT files in the specified
paths and processes them sequentially. You can specify a mix of files
and directories. Directory arguments expand into the files they
contain that match the glob '*.lrit*'. The complete list of LRIT files
is sorted according to their time stamp header prior to processing it.
"""

_SHORT = "c:m:f"
_LONG = ["config=", "mode=", "subscribe=", "force", "out=", "help", "version"]


class ProcessMode(enum.Enum):
    UNDEFINED = enum.auto()
    PACKET = enum.auto()
    LRIT = enum.auto()


@dataclass
class Options:
    """Parsed command line options."""

    config: str = ""
    mode: ProcessMode = ProcessMode.UNDEFINED
    force: bool = False
    subscribe: str = ""
    out: str = "."
    paths: list[str] = field(default_factory=list)


class OptionsError(Exception):
    """Raised for invalid command line arguments."""


def _print_version() -> None:
    try:
        number = version("goeskit")
    except PackageNotFoundError:
        number = "unknown"
    print(f"{PROGRAM} {number}")


def _check_config(path: str) -> None:
    try:
        st = os.stat(path)
    except OSError as exc:
        error = exc.strerror
    else:
        error = None if stat.S_ISREG(st.st_mode) else "Not a file"
    if error is not None:
        raise OptionsError(f"invalid configuration file '{path}': {error}")


def _expand_packet_paths(paths: list[str]) -> list[str]:
    """Expand directories into their sorted ``*.raw`` files."""
    files: list[str] = []
    for path in paths:
        try:
            st = os.stat(path)
        except OSError as exc:
            raise OptionsError(f"stat: {exc.strerror}") from exc
        if stat.S_ISDIR(st.st_mode):
            matches = [
                os.path.join(path, name)
                for name in os.listdir(path)
                if fnmatch.fnmatchcase(name, "*.raw")
            ]
            files.extend(sorted(matches))
        else:
            files.append(path)
    return files


def parse_options(argv: list[str] | None = None) -> Options:
    """Parse arguments (without the program name) into :class:`Options`.

    ``--help`` and ``--version`` print and raise ``SystemExit(0)``.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        pairs, rest = getopt.gnu_getopt(args, _SHORT, _LONG)
    except getopt.GetoptError as exc:
        raise OptionsError(f"Invalid option: {exc.msg}") from exc

    opts = Options()
    for flag, value in pairs:
        if flag in ("-c", "--config"):
            opts.config = value
        elif flag in ("-m", "--mode"):
            if value == "packet":
                opts.mode = ProcessMode.PACKET
            elif value == "lrit":
                opts.mode = ProcessMode.LRIT
            else:
                raise OptionsError(f"invalid argument '{value}' for '--mode'")
        elif flag == "--subscribe":
            opts.subscribe = value
            # A subscription address implies packet mode
            if opts.mode is ProcessMode.UNDEFINED:
                opts.mode = ProcessMode.PACKET
        elif flag in ("-f", "--force"):
            opts.force = True
        elif flag == "--out":
            opts.out = value
        elif flag == "--help":
            print(USAGE, file=sys.stderr)
            raise SystemExit(0)
        elif flag == "--version":
            _print_version()
            raise SystemExit(0)

    if not opts.config:
        raise OptionsError("no configuration file specified")
    _check_config(opts.config)

    if opts.mode is ProcessMode.UNDEFINED:
        raise OptionsError("no mode specified")
    if opts.subscribe and opts.mode is not ProcessMode.PACKET:
        raise OptionsError("use of '--subscribe' implies '--mode packet'")

    opts.paths = list(rest)
    if opts.mode is ProcessMode.PACKET:
        opts.paths = _expand_packet_paths(opts.paths) if opts.paths else [STDIN_PATH]
    return opts