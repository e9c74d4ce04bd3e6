"""Writing output files with overwrite protection and progress logging."""

from __future__ import annotations

import json
import os
from typing import Any

import numpy as np
from PIL import Image as PILImage


class FileWriter:
    """Writes files below a prefix directory, skipping existing files unless forced."""

    def __init__(self, prefix: str, force: bool = False) -> None:
        self.prefix = prefix
        self.force = force

    def build_path(self, path: str) -> str:
        if self.prefix == ".":
            return path
        return f"{self.prefix}/{path}"

    def _may_write(self, path: str) -> bool:
        parent = path.rpartition("/")[0]
        if parent:
            os.makedirs(parent, exist_ok=True)
        if not os.path.exists(path):
            return True
        return self.force

    @staticmethod
    def _log_time(elapsed: float | None) -> None:
        if elapsed is None:
            print()
        else:
            print(f" (took {elapsed:.3f}s)")

    def _prepare(self, path: str, elapsed: float | None) -> str | None:
        full = self.build_path(path)
        if not self._may_write(full):
            print(f"Skipping (file exists): {full}", end="")
            self._log_time(elapsed)
            return None
        print(f"Writing: {full}", end="", flush=True)
        return full

    def write_image(
        self, path: str, image: np.ndarray, elapsed: float | None = None
    ) -> str | None:
        """Write an image array; three-channel arrays are in BGR order.

        Returns the path written, or None when the file was skipped.
        """
        full = self._prepare(path, elapsed)
        if full is None:
            return None
        pixels = np.asarray(image, dtype=np.uint8)
        if pixels.ndim == 3 and pixels.shape[2] >= 3:
            pixels = pixels[..., 2::-1]
        PILImage.fromarray(np.ascontiguousarray(pixels)).save(full)
        self._log_time(elapsed)
        return full

    def write_bytes(
        self, path: str, data: bytes, elapsed: float | None = None
    ) -> str | None:
        """Write raw bytes; returns the path written or None when skipped."""
        full = self._prepare(path, elapsed)
        if full is None:
            return None
        with open(full, "wb") as f:
            f.write(data)
        self._log_time(elapsed)
        return full

    def write_json(
        self, path: str, obj: Any, elapsed: float | None = None
    ) -> str | None:
        """Write compact JSON; returns the path written or None when skipped."""
        full = self._prepare(path, elapsed)
        if full is None:
            return None
        with open(full, "w", encoding="utf-8") as f:
            json.dump(obj, f, separators=(",", ":"), sort_keys=True)
        self._log_time(elapsed)
        return full