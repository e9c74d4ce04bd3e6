"""Loading handler configuration from TOML files."""

from __future__ import annotations

import json
import string
import tomllib
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from PIL import Image as PILImage

from goeskit.area import Area
from goeskit.gradient import Gradient, GradientPoint, Interpolation

_WHITE = (1.0, 1.0, 1.0)
_GRAY_MODES = {"1", "L", "I", "I;16", "F"}
_ALPHA_MODES = {"RGBA", "LA", "PA"}


class ConfigError(ValueError):
    """Raised when a configuration file or a file it refers to is invalid."""


def parse_hex_color(code: str) -> tuple[float, float, float]:
    """Parse ``#rgb`` or ``#rrggbb`` into components in 0-1.

    Codes that do not start with ``#`` yield white.
    """
    if not code:
        raise ConfigError("Invalid hex color code: ")
    if code[0] != "#":
        return _WHITE
    digits = code[1:]
    if len(code) not in (4, 7) or not all(c in string.hexdigits for c in digits):
        raise ConfigError(f"Invalid hex color code: {code}")
    value = int(digits, 16)
    if len(code) == 4:
        return (
            ((value & 0xF00) >> 8) / 15.0,
            ((value & 0xF0) >> 4) / 15.0,
            (value & 0xF) / 15.0,
        )
    return (
        ((value & 0xFF0000) >> 16) / 255.0,
        ((value & 0xFF00) >> 8) / 255.0,
        (value & 0xFF) / 255.0,
    )


@dataclass
class MapOverlay:
    """A GeoJSON map overlay and the colour (BGR, 0-255) to draw it in."""

    path: str
    geo: dict[str, Any]
    color: tuple[float, float, float] = (255.0, 255.0, 255.0)


@dataclass
class HandlerConfig:
    """Settings for one output handler."""

    type: str
    product: str = ""
    regions: list[str] = field(default_factory=list)
    channels: list[str] = field(default_factory=list)
    dir: str = "."
    format: str = "png"
    json: bool = False
    crop: Area = field(default_factory=Area)
    remap: dict[str, np.ndarray] = field(default_factory=dict)
    gradient: dict[str, Gradient] = field(default_factory=dict)
    lerptype: Interpolation = Interpolation.UNDEFINED
    lut: np.ndarray | None = None
    filename: str = ""
    maps: list[MapOverlay] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string(table: dict[str, Any], key: str, default: str | None = None) -> str | None:
    value = table.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f'Expected "{key}" to be a string')
    return value


def _string_list(table: dict[str, Any], key: str) -> list[str] | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f'Expected "{key}" to be a list of strings')
    return list(value)


def _table(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f'Expected "{what}" to be a table')
    return value


def _number(value: Any, what: str) -> float:
    if not _is_number(value):
        raise ConfigError(f'Expected "{what}" to be a number')
    return float(value)


def _read_image(path: str, *, unchanged: bool) -> np.ndarray:
    """Read an image; colour images come back in BGR(A) channel order."""
    try:
        with PILImage.open(path) as img:
            img.load()
            if unchanged and img.mode in _GRAY_MODES:
                return np.asarray(img.convert("L"))
            if unchanged and img.mode in _ALPHA_MODES:
                rgba = np.asarray(img.convert("RGBA"))
                return np.ascontiguousarray(rgba[..., [2, 1, 0, 3]])
            rgb = np.asarray(img.convert("RGB"))
            return np.ascontiguousarray(rgb[..., ::-1])
    except OSError as exc:
        raise ConfigError(f"Unable to load image at: {path}") from exc


def _pixel_count(image: np.ndarray) -> int:
    return image.shape[0] * image.shape[1]


def _gradient_point(point: dict[str, Any]) -> GradientPoint:
    units = point.get("units", point.get("u"))
    if units is None or not _is_number(units):
        raise ConfigError("Expected numeric units field in gradient point")

    color = point.get("color", point.get("c"))
    red, green, blue = point.get("r"), point.get("g"), point.get("b")
    hue, sat, val = point.get("h"), point.get("s"), point.get("v")

    r = g = b = -1.0
    # A hex colour code takes precedence over individual RGB components
    if isinstance(color, str):
        r, g, b = parse_hex_color(color)
    elif red is not None and green is not None and blue is not None:
        r, g, b = _number(red, "r"), _number(green, "g"), _number(blue, "b")

    if r >= 0 and g >= 0 and b >= 0:
        return GradientPoint.from_rgb(float(units), r, g, b)
    if hue is not None and sat is not None and val is not None:
        return GradientPoint.from_hsv(
            float(units), _number(hue, "h"), _number(sat, "s"), _number(val, "v")
        )
    raise ConfigError("Invalid color in gradient point")


@dataclass
class Config:
    """All handlers from a configuration file, plus a cache of loaded JSON."""

    handlers: list[HandlerConfig] = field(default_factory=list)
    _json: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load and validate the TOML configuration at ``path``."""
        try:
            with open(path, "rb") as f:
                document = tomllib.load(f)
        except OSError as exc:
            raise ConfigError(f"Unable to open file at: {path} ({exc.strerror})") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc

        entries = document.get("handler")
        if not entries:
            raise ConfigError("No handlers found")
        if not isinstance(entries, list):
            raise ConfigError('Expected "handler" to be an array of tables')

        config = cls()
        config.handlers = [
            config._load_handler(_table(entry, "handler")) for entry in entries
        ]
        return config

    def load_json(self, path: str) -> Any:
        """Load the JSON file at ``path``, reading each path only once."""
        if path not in self._json:
            try:
                with open(path, encoding="utf-8") as f:
                    self._json[path] = json.load(f)
            except OSError as exc:
                raise ConfigError(
                    f"Unable to open file at: {path} ({exc.strerror})"
                ) from exc
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in file at: {path} ({exc})") from exc
        return self._json[path]

    def _load_map(self, table: dict[str, Any]) -> MapOverlay:
        path = _string(table, "path", "")
        if not path:
            raise ConfigError("Map does not specify a path")
        geo = self.load_json(path)
        if not isinstance(geo, dict) or geo.get("type") != "FeatureCollection":
            raise ConfigError("Expected GeoJSON to be of type FeatureCollection")
        r, g, b = _WHITE
        color = _string(table, "color")
        if color is not None:
            r, g, b = parse_hex_color(color)
        return MapOverlay(path=path, geo=geo, color=(255 * b, 255 * g, 255 * r))

    def _load_handler(self, table: dict[str, Any]) -> HandlerConfig:
        kind = _string(table, "type")
        if kind is None:
            raise ConfigError('Expected "type" in handler')
        h = HandlerConfig(type=kind)
        h.product = _string(table, "product", "")

        # Singular "region" is the old way to filter; plural "regions" wins
        region = _string(table, "region")
        if region is not None:
            h.regions.append(region)
        regions = _string_list(table, "regions")
        if regions is not None:
            h.regions = regions

        channels = _string_list(table, "channels")
        if channels is not None:
            h.channels = channels

        h.dir = _string(table, "dir") or _string(table, "directory", ".")
        h.format = _string(table, "format", "png")

        flag = table.get("json")
        if flag is not None:
            if not isinstance(flag, bool):
                raise ConfigError('Expected "json" to be a boolean')
            h.json = flag

        if "crop" in table:
            h.crop = self._load_crop(table["crop"])

        if "remap" in table:
            for channel, entry in _table(table["remap"], "remap").items():
                path = _string(_table(entry, "remap"), "path")
                if path is None:
                    raise ConfigError('Expected "path" in remap')
                image = _read_image(path, unchanged=True)
                if _pixel_count(image) != 256:
                    raise ConfigError("Expected channel remap image to have 256 pixels")
                h.remap[channel.upper()] = image

        if "gradient" in table:
            for channel, entry in _table(table["gradient"], "gradient").items():
                entry = _table(entry, "gradient")
                interpolation = entry.get("interpolation")
                if interpolation is not None:
                    if interpolation == "hsv":
                        h.lerptype = Interpolation.HSV
                    elif interpolation == "rgb":
                        h.lerptype = Interpolation.RGB
                    else:
                        raise ConfigError(
                            "Unknown gradient interpolation type "
                            '(supported types are "rgb" and "hsv")'
                        )
                points = entry.get("points")
                if not isinstance(points, list):
                    raise ConfigError('Expected "points" in gradient')
                gradient = Gradient()
                for point in points:
                    gradient.add_point(_gradient_point(_table(point, "points")))
                h.gradient[channel.upper()] = gradient

        if "lut" in table:
            path = _string(_table(table["lut"], "lut"), "path")
            if path is None:
                raise ConfigError('Expected "path" in lut')
            image = _read_image(path, unchanged=False)
            if _pixel_count(image) != 256 * 256:
                raise ConfigError("Expected false color table to have 256x256 pixels")
            h.lut = image

        filename = table.get("filename")
        if filename is not None:
            # A list is concatenated, which keeps long patterns readable
            if isinstance(filename, list):
                h.filename = "".join(_string_list(table, "filename"))
            else:
                h.filename = _string(table, "filename")

        maps = table.get("map")
        if maps:
            if not isinstance(maps, list):
                raise ConfigError('Expected "map" to be an array of tables')
            h.maps = [self._load_map(_table(m, "map")) for m in maps]

        if h.lut is not None and len(h.channels) != 2:
            raise ConfigError("Using a false color table requires selecting 2 channels")
        return h

    @staticmethod
    def _load_crop(value: Any) -> Area:
        if not isinstance(value, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in value
        ):
            raise ConfigError('Expected "crop" to hold 4 integers')
        if len(value) != 4:
            raise ConfigError('Expected "crop" to hold 4 integers')
        crop = Area(
            min_column=value[0],
            max_column=value[1],
            min_line=value[2],
            max_line=value[3],
        )
        if crop.width() < 1:
            raise ConfigError('Expected "crop" to have positive width')
        if crop.height() < 1:
            raise ConfigError('Expected "crop" to have positive height')
        return crop