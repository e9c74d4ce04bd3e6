# goeskit

Building blocks for turning GOES LRIT/HRIT product metadata into files
on disk: handler configuration, command-line options, output file
names, colour gradients, and the parsing of time stamps and identifiers
out of EMWIN, NWS and GOES-N product names and headers.

The package works on plain Python values and NumPy arrays. You hand it
the annotation texts, header values and pixel arrays you already have.

## What is inside

| Module | What it gives you |
| --- | --- |
| `goeskit.area` | `Area`, a pixel rectangle with `width()`, `height()`, `is_empty()`, `intersection()` and `union()`; `str()` gives `(WxH+X+Y)`. |
| `goeskit.gradient` | `GradientPoint` (built with `from_rgb` or `from_hsv`), `Gradient` (points kept sorted by units, `interpolate`, `debug`) and `Interpolation` (`UNDEFINED`, `RGB`, `HSV`). |
| `goeskit.filename` | `FilenameBuilder`, the `AWIPS`, `Region` and `Channel` records, and `remove_suffix`. |
| `goeskit.file_writer` | `FileWriter`, which writes images, bytes and JSON below an output prefix and skips files that already exist unless forced. |
| `goeskit.config` | `Config.load` for the TOML handler configuration, `Config.load_json`, `HandlerConfig`, `MapOverlay`, `parse_hex_color` and `ConfigError`. |
| `goeskit.options` | `parse_options`, `Options`, `ProcessMode` and `OptionsError`. |
| `goeskit.emwin` | `parse_emwin_time` and `parse_emwin_awips` for EMWIN file names. |
| `goeskit.nws` | `is_nws_annotation`, `parse_nws_text_time`, `extract_text_awips`, `parse_irregular_time`, `nws_image_basename` and `parse_text_time`. |
| `goeskit.goesn` | `region_from_sub_id`, `channel_from_sub_id`, `parse_goesn_time`, `parse_goesn_details` and `GOESNDetails` for GOES-13/15 images. |

All times returned by the parsers are timezone-aware UTC `datetime`
values; a parser returns `None` when the name does not carry a valid
time.

## Output file names

`FilenameBuilder.build(pattern, extension)` expands a pattern into a
path below the builder's `dir` (or `./` when none is set). An empty
pattern means `{filename}`; a non-empty extension is appended after a
dot. The following placeholders are understood:

- `%t` — time as `YYYYMMDD-HHMMSS` (UTC)
- `{filename}` — the builder's `filename`
- `{time:FORMAT}` — the time formatted with `strftime` codes, in UTC
- `{awips:FIELD}` — one of `t1t2`, `a1a2`, `ii`, `cccc`, `yy`, `gggg`,
  `bbb`, `nnn`, `xxx`, `qq`
- `{region:short}`, `{region:long}`, `{channel:short}`, `{channel:long}`

A `|upper` or `|lower` modifier, as in `{region:short|lower}`, changes
the case of the substituted text. Unknown field names expand to an
empty string; an opening placeholder without a closing `}` raises
`ValueError`.

```python
from datetime import datetime, timezone
from goeskit.filename import FilenameBuilder, Region

fb = FilenameBuilder(
    dir="out",
    filename="sample",
    time=datetime(2018, 3, 2, 1, 12, 2, tzinfo=timezone.utc),
    region=Region("FD", "Full Disk"),
)
fb.build("{region:short|lower}/{time:%Y%m%d}_{filename}", "png")
# 'out/fd/20180302_sample.png'
```

`remove_suffix(name)` strips everything from the last dot onwards.

## Writing files

`FileWriter(prefix, force=False)` places every path below `prefix`
(a prefix of `.` leaves paths unchanged) and creates parent directories
as needed. `write_image`, `write_bytes` and `write_json` print a
`Writing: ...` or `Skipping (file exists): ...` line, optionally with
the elapsed seconds passed in, and return the path written or `None`
when an existing file was left alone. Three-channel image arrays are
taken in BGR order; JSON is written compactly with sorted keys.

## Configuration

`Config.load(path)` reads a TOML file holding one or more `[[handler]]`
tables. Each handler has a `type` and may set `product`, `region` or
`regions`, `channels`, `dir` (or `directory`, default `.`), `format`
(default `png`), `json`, `crop` (four integers: min column, max column,
min line, max line, with positive width and height), `remap`,
`gradient`, `lut`, `filename` (a string or a list of strings joined
together) and `map` overlays. Any problem raises `ConfigError` with the
reason.

- `remap.<channel>.path` names an image of 256 pixels; `lut.path` names
  an image of 256×256 pixels and requires exactly two `channels`.
- `gradient.<channel>` holds `points` and an optional `interpolation`
  (`"rgb"` or `"hsv"`). Each point takes `units` (or `u`) and a colour
  given as a hex code `color`/`c` (`#rgb` or `#rrggbb`), as `r`, `g`,
  `b` components (0–1 or 0–255) or as `h`, `s`, `v` components (0–1, or
  0–360 and 0–100).
- `map` entries name a GeoJSON `FeatureCollection` by `path` and an
  optional hex `color`; `MapOverlay.color` holds the colour as BGR in
  0–255. Each JSON file is read once and cached by `Config.load_json`.

`parse_hex_color(code)` returns components in 0–1; a code that does not
start with `#` yields white.

## Command-line options

`parse_options(argv)` parses the arguments that follow the program name
(`sys.argv[1:]` when `argv` is `None`): `-c/--config PATH`,
`-m/--mode packet|lrit`, `--subscribe ADDR` (implies packet mode),
`-f/--force`, `--out DIR`, `--help` and `--version`. The configuration
must name an existing regular file and a mode must be given; problems
raise `OptionsError`. `--help` and `--version` print and raise
`SystemExit(0)`. In packet mode, directory arguments expand into their
sorted `*.raw` files, and with no paths the process's standard input
(`/proc/self/fd/0`) is used.

## Gradients

```python
from goeskit.gradient import Gradient, GradientPoint, Interpolation

gradient = Gradient()
gradient.add_point(GradientPoint.from_rgb(180.0, 0, 0, 255))
gradient.add_point(GradientPoint.from_rgb(310.0, 255, 0, 0))
point = gradient.interpolate(245.0, Interpolation.HSV)
```

`interpolate` clamps to the end points outside the covered range and
blends either in RGB (the default) or, taking the shorter way round the
hue circle, in HSV.

## What this package does not do

goeskit has no program of its own to run: `parse_options` parses the
options, but nothing reads packets, assembles or parses LRIT files, or
drives handlers from them. It does not decode image segments into pixel
arrays, draw map overlays, build false colour images, read GOES-16/17 or
Himawari-8 image details, or process radio samples. Those steps are left
to the caller, who passes the resulting values to the functions above.