"""Colour gradients used to map physical units onto RGB values."""

from __future__ import annotations

import bisect
import enum
import math
import sys
from dataclasses import dataclass, field


class Interpolation(enum.Enum):
    """Colour space used to interpolate between gradient points."""

    UNDEFINED = -1
    RGB = 0
    HSV = 1


@dataclass(frozen=True)
class GradientPoint:
    """A colour at a position along a gradient, held as both RGB and HSV."""

    units: float = 0.0
    rgb: tuple[float, float, float] = (0.0, 0.0, 0.0)
    hsv: tuple[float, float, float] = (0.0, 0.0, 0.0)

    @classmethod
    def from_rgb(cls, units: float, r: float, g: float, b: float) -> GradientPoint:
        """Build a point from RGB components in 0-1 or 0-255."""
        if r > 1 or g > 1 or b > 1:
            r, g, b = r / 255, g / 255, b / 255

        lo = min(r, g, b)
        hi = max(r, g, b)
        d = hi - lo
        s = 0.0 if hi <= 0 else d / hi

        if lo == hi:
            h = 0.0
        elif hi == r:
            h = math.fmod((g - b) / d, 6)
        elif hi == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4

        return cls(units=units, rgb=(r, g, b), hsv=(h / 6, s, hi))

    @classmethod
    def from_hsv(cls, units: float, h: float, s: float, v: float) -> GradientPoint:
        """Build a point from HSV in 0-1, or hue 0-360 with saturation/value 0-100."""
        if h > 1 or s > 1 or v > 1:
            h, s, v = h / 360, s / 100, v / 100

        i = int(h * 6)
        f = h * 6 - i
        p = v * (1 - s)
        q = v * (1 - f * s)
        t = v * (1 - (1 - f) * s)
        sectors = ((v, t, p), (q, v, p), (p, v, t), (p, q, v), (t, p, v), (v, p, q))
        return cls(units=units, rgb=sectors[i % 6], hsv=(h, s, v))

    def __str__(self) -> str:
        rgb = ",".join(f"{c:g}" for c in self.rgb)
        hsv = ",".join(f"{c:g}" for c in self.hsv)
        return f"Units: {self.units:g}, RGB({rgb}), HSV({hsv})"


@dataclass
class Gradient:
    """An ordered list of gradient points."""

    points: list[GradientPoint] = field(default_factory=list)

    def add_point(self, point: GradientPoint) -> int:
        """Insert a point keeping the list ordered by units; return the new size."""
        index = bisect.bisect_left(self.points, point.units, key=lambda p: p.units)
        self.points.insert(index, point)
        return len(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def debug(self) -> None:
        """Print the gradient points to stderr."""
        for index, point in enumerate(self.points):
            print(f"[{index}] -> {point}", file=sys.stderr)

    def interpolate(
        self,
        units: float,
        lerptype: Interpolation = Interpolation.UNDEFINED,
    ) -> GradientPoint:
        """Return the colour at ``units``, clamped to the ends of the gradient."""
        if not self.points:
            raise ValueError("Gradient has no points")

        left = None
        right = 0
        for index, point in enumerate(self.points):
            if right != 0:
                break
            if point.units <= units:
                left = index
            if point.units >= units:
                right = index

        if left is None:
            return self.points[0]
        if right == 0:
            return self.points[-1]

        lp = self.points[left]
        rp = self.points[right]
        du = rp.units - lp.units
        pd = (units - lp.units) / du if du else 0.0

        if lerptype in (Interpolation.RGB, Interpolation.UNDEFINED):
            r, g, b = (pd * rc + (1 - pd) * lc for lc, rc in zip(lp.rgb, rp.rgb))
            return GradientPoint.from_rgb(units, r, g, b)

        if lerptype == Interpolation.HSV:
            lh, rh = lp.hsv[0], rp.hsv[0]
            dh = rh - lh
            adh = abs(dh)
            # Take the shortest path around the hue circle
            if adh > 0.5:
                rh -= dh / adh
            h = pd * rh + (1 - pd) * lh
            s = pd * rp.hsv[1] + (1 - pd) * lp.hsv[1]
            v = pd * rp.hsv[2] + (1 - pd) * lp.hsv[2]
            if h < 0.0:
                h += 1.0
            return GradientPoint.from_hsv(units, h, s, v)

        raise ValueError("Invalid interpolation type specified")